from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from typing import Any


class TaskState(Enum):
    UNVISITED = "unvisited"
    RESOLVING = "resolving"
    COMPUTING = "computing"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(slots=True)
class InFlight:
    """The single running computation of a task's producer."""

    identifier: str
    value: "Any" = None
    error: Exception | None = None


@dataclass
class ResolutionContext:
    """
    State shared by a single resolution call. Created fresh for every call and
    dropped once the call settles.
    """

    states: dict[str, TaskState] = field(default_factory=dict)
    resolved: dict[str, bool] = field(default_factory=dict)
    results: dict[str, "Any"] = field(default_factory=dict)
    in_flight: dict[str, InFlight] = field(default_factory=dict)

    # identifiers still to visit, popped from the end
    pending: list[str] = field(default_factory=list)
    # visited identifiers whose dependencies are all resolved
    ready: deque[str] = field(default_factory=deque)

    running: int = 0
    failure: Exception | None = None

    def state(self, identifier: str) -> TaskState:
        return self.states.get(identifier, TaskState.UNVISITED)

    def is_resolved(self, identifier: str) -> bool:
        return self.resolved.get(identifier, False)

    def claim(self, identifier: str) -> InFlight | None:
        """
        Register the computation for `identifier`. Returns None if one was already
        registered. Must not be separated from the producer start by an await.
        """
        if identifier in self.in_flight:
            return None

        handle = self.in_flight[identifier] = InFlight(identifier)
        self.states[identifier] = TaskState.COMPUTING
        self.running += 1
        return handle

    def store(self, identifier: str, value: "Any") -> None:
        if self.is_resolved(identifier):
            raise RuntimeError(f"Task '{identifier}' has already been resolved.")

        self.results[identifier] = value
        self.resolved[identifier] = True
        self.states[identifier] = TaskState.RESOLVED

    def fail(self, identifier: str, error: Exception) -> None:
        self.states[identifier] = TaskState.FAILED

        # only the first failure is reported to the caller
        if self.failure is None:
            self.failure = error
