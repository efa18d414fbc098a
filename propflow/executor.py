import inspect
import logging
import math
from typing import TYPE_CHECKING

import anyio

from .aggregator import aggregate
from .context import ResolutionContext, TaskState
from .exceptions import DependencyError
from .validation import validate

if TYPE_CHECKING:  # pragma: no cover
    from typing import Any

    from anyio.abc import TaskGroup
    from anyio.streams.memory import MemoryObjectSendStream

    from .context import InFlight
    from .flow import Flow
    from .task import TaskSpec

logger = logging.getLogger(__name__)


def capacity(concurrency: "Any") -> float:
    """Number of producers allowed to run at once. Anything but a positive int is unbounded."""
    if (
        isinstance(concurrency, int)
        and not isinstance(concurrency, bool)
        and concurrency > 0
    ):
        return concurrency

    return math.inf


class Executor:
    """
    Resolves every task of a Flow, running producers concurrently in a task group as
    soon as their dependencies are resolved and a capacity token is available.

    Each producer runs at most once per call. The first failure stops new producers
    from starting; producers that are already running are left to finish before the
    failure is raised.
    """

    def __init__(self, flow: "Flow", concurrency: int | None = None) -> None:
        self.flow = flow
        self.concurrency = capacity(concurrency)

    async def run(self) -> dict[str, "Any"]:
        identifiers = self.flow.identifiers
        context = ResolutionContext(pending=list(reversed(identifiers)))
        limiter = anyio.CapacityLimiter(self.concurrency)
        send_stream, receive_stream = anyio.create_memory_object_stream["InFlight"](
            math.inf
        )

        async with anyio.create_task_group() as tg, send_stream, receive_stream:
            while True:
                if context.failure is None:
                    try:
                        self._advance(context, tg, limiter, send_stream)
                    except DependencyError as e:
                        context.fail(e.identifier, e)

                if not context.running:
                    break

                self._settle(context, await receive_stream.receive())

        if context.failure is not None:
            logger.debug("flow resolution failed: %r", context.failure)
            raise context.failure

        return aggregate(identifiers, context)

    def _advance(
        self,
        context: ResolutionContext,
        tg: "TaskGroup",
        limiter: anyio.CapacityLimiter,
        send_stream: "MemoryObjectSendStream[InFlight]",
    ) -> None:
        """Visit pending tasks depth first, launching whatever becomes ready."""
        while True:
            self._launch(context, tg, limiter, send_stream)

            if not context.pending:
                return

            self._visit(context, context.pending.pop())

    def _visit(self, context: ResolutionContext, identifier: str) -> None:
        if context.state(identifier) is not TaskState.UNVISITED:
            return

        validate(self.flow, identifier)
        context.states[identifier] = TaskState.RESOLVING

        if unresolved := [
            dep
            for dep in dict.fromkeys(self.flow[identifier].dependencies)
            if not context.is_resolved(dep)
        ]:
            # reversed so dependencies are visited in their declared order
            context.pending.extend(reversed(unresolved))
        else:
            context.ready.append(identifier)

    def _launch(
        self,
        context: ResolutionContext,
        tg: "TaskGroup",
        limiter: anyio.CapacityLimiter,
        send_stream: "MemoryObjectSendStream[InFlight]",
    ) -> None:
        while context.ready:
            identifier = context.ready[0]

            if identifier not in context.in_flight:
                try:
                    limiter.acquire_on_behalf_of_nowait(identifier)
                except anyio.WouldBlock:
                    return

                spec = self.flow[identifier]
                dependency_results = {
                    dep: context.results[dep] for dep in spec.dependencies
                }

                # claiming and starting happen without a checkpoint in between
                handle = context.claim(identifier)
                tg.start_soon(
                    self._compute,
                    handle,
                    spec,
                    dependency_results,
                    limiter,
                    send_stream,
                    name=f"propflow:{identifier}",
                )
                logger.debug("started task '%s'", identifier)

            context.ready.popleft()

    async def _compute(
        self,
        handle: "InFlight",
        spec: "TaskSpec",
        dependency_results: dict[str, "Any"],
        limiter: anyio.CapacityLimiter,
        send_stream: "MemoryObjectSendStream[InFlight]",
    ) -> None:
        try:
            value = spec.produce(dependency_results)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            handle.error = e
        else:
            handle.value = value
        finally:
            limiter.release_on_behalf_of(handle.identifier)

        send_stream.send_nowait(handle)

    def _settle(self, context: ResolutionContext, handle: "InFlight") -> None:
        context.running -= 1
        identifier = handle.identifier

        if handle.error is not None:
            logger.debug("task '%s' failed: %r", identifier, handle.error)
            context.fail(identifier, handle.error)
            return

        context.store(identifier, handle.value)
        logger.debug("resolved task '%s'", identifier)

        for dependent in self.flow.topology.dependents(identifier):
            if context.state(dependent) is TaskState.RESOLVING and all(
                context.is_resolved(dep) for dep in self.flow[dependent].dependencies
            ):
                context.ready.append(dependent)
