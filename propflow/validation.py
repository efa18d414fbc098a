from typing import TYPE_CHECKING

from .exceptions import CyclicDependencyError, NonExistentDependencyError

if TYPE_CHECKING:  # pragma: no cover
    from .flow import Flow


def validate(flow: "Flow", identifier: str) -> None:
    """
    Check the declared dependencies of a single task before it is resolved.

    Every dependency must be configured in the flow, and no dependency may itself
    depend on the task, directly or through any chain of other tasks.
    """
    dependencies = list(dict.fromkeys(flow[identifier].dependencies))

    if missing := [dep for dep in dependencies if dep not in flow]:
        raise NonExistentDependencyError(identifier, missing)

    if cyclic := [
        dep for dep in dependencies if flow.topology.in_cycle(identifier, dep)
    ]:
        raise CyclicDependencyError(identifier, cyclic)
