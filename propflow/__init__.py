from .exceptions import (
    CyclicDependencyError,
    DependencyError,
    ErrorKind,
    InvalidTaskSpecError,
    NonExistentDependencyError,
    PropflowError,
)
from .executor import Executor
from .flow import Flow
from .resolver import Resolver, resolve, resolve_sync
from .task import Constant, Dependent, Producer, TaskSpec

__all__ = [
    "Constant",
    "CyclicDependencyError",
    "DependencyError",
    "Dependent",
    "ErrorKind",
    "Executor",
    "Flow",
    "InvalidTaskSpecError",
    "NonExistentDependencyError",
    "Producer",
    "PropflowError",
    "Resolver",
    "TaskSpec",
    "resolve",
    "resolve_sync",
]
