from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable
    from typing import Any, ClassVar


class ErrorKind(IntEnum):
    NON_EXISTENT_DEPENDENCY = 0
    CYCLIC_DEPENDENCY = 1


class PropflowError(Exception):
    def __init__(self, *args: "Any", **kwargs: "Any") -> None:
        super().__init__(*args, **kwargs)


##
## FLOW CONSTRUCTION
##


class InvalidTaskSpecError(PropflowError, TypeError):
    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        super().__init__(f"Task '{identifier}' has an invalid spec: {reason}.")


##
## DEPENDENCY VALIDATION
##


class DependencyError(PropflowError):
    kind: "ClassVar[ErrorKind]"
    title: "ClassVar[str]"

    def __init__(self, identifier: str, offending: "Iterable[str]") -> None:
        self.identifier = identifier
        self.data: list[str] = list(offending)
        super().__init__(self.message)

    @property
    def code(self) -> int:
        return int(self.kind)

    @property
    def name(self) -> str:
        return f"Flow Error: {self.title}"

    @property
    def message(self) -> str:
        offending = ", ".join(f"'{dep}'" for dep in self.data)
        return f"{self.title} for task '{self.identifier}': {offending}"


class NonExistentDependencyError(DependencyError):
    kind = ErrorKind.NON_EXISTENT_DEPENDENCY
    title = "Non existent dependencies"


class CyclicDependencyError(DependencyError):
    kind = ErrorKind.CYCLIC_DEPENDENCY
    title = "Cyclic dependencies"


##
## AGGREGATION
##


class UnresolvedTaskError(PropflowError):
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            f"Task '{identifier}' must be resolved before its result can be read."
        )
