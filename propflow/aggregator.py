from typing import TYPE_CHECKING

from .exceptions import UnresolvedTaskError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable
    from typing import Any

    from .context import ResolutionContext


def aggregate(
    identifiers: "Iterable[str]", context: "ResolutionContext"
) -> dict[str, "Any"]:
    """Collect the stored result of every requested identifier."""
    results: dict[str, "Any"] = {}

    for identifier in identifiers:
        if not context.is_resolved(identifier):
            raise UnresolvedTaskError(identifier)

        results[identifier] = context.results[identifier]

    return results
