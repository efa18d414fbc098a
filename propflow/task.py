from collections.abc import Callable
from typing import TYPE_CHECKING, Annotated, Any, Literal

from annotated_types import MinLen
from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from .exceptions import InvalidTaskSpecError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Awaitable, Mapping


class Constant(BaseModel):
    """A task whose value is fixed up front."""

    kind: Literal["constant"] = "constant"
    value: Any = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def dependencies(self) -> tuple[str, ...]:
        return ()

    def produce(self, results: "Mapping[str, Any]") -> Any:
        return self.value


class Producer(BaseModel):
    """A task computed by a callable that takes no arguments."""

    kind: Literal["producer"] = "producer"
    fn: Callable[[], Any]

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def dependencies(self) -> tuple[str, ...]:
        return ()

    def produce(self, results: "Mapping[str, Any]") -> "Any | Awaitable[Any]":
        return self.fn()


class Dependent(BaseModel):
    """
    A task computed from the results of other tasks. The callable receives a dict
    mapping each dependency identifier to its resolved result.
    """

    kind: Literal["dependent"] = "dependent"
    dependencies: Annotated[tuple[StrictStr, ...], MinLen(1)]
    fn: Callable[[dict[str, Any]], Any]

    model_config = ConfigDict(extra="forbid", frozen=True)

    def produce(self, results: "Mapping[str, Any]") -> "Any | Awaitable[Any]":
        return self.fn(dict(results))


TaskSpec = Constant | Producer | Dependent


def normalize(identifier: str, entry: Any) -> TaskSpec:
    """
    Convert a raw flow config entry into a TaskSpec.

    - a TaskSpec is returned as is
    - a callable becomes a Producer, any other non-list value a Constant
    - a list is read as `[*dependencies, fn]`; a single element list collapses to
      the Producer or Constant of that element
    """
    if isinstance(entry, TaskSpec):
        return entry

    if not isinstance(entry, list):
        return Producer(fn=entry) if callable(entry) else Constant(value=entry)

    if not entry:
        raise InvalidTaskSpecError(identifier, "an empty list has no producer")

    *dependencies, fn = entry

    if not dependencies:
        return Producer(fn=fn) if callable(fn) else Constant(value=fn)
    elif not callable(fn):
        raise InvalidTaskSpecError(
            identifier, "the last element of a dependency list must be callable"
        )

    try:
        return Dependent(dependencies=dependencies, fn=fn)
    except ValidationError as e:
        raise InvalidTaskSpecError(
            identifier, "dependencies must be task identifier strings"
        ) from e
