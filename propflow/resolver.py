from functools import partial
from typing import TYPE_CHECKING

import anyio
import sniffio

from .config import Config
from .executor import Executor
from .flow import Flow

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping
    from typing import Any


class Resolver:
    """
    Entry point for resolving flow configs.

    ```python
    resolver = Resolver(concurrency=4)

    results = await resolver.resolve({
        "user": fetch_user,
        "greeting": ["user", lambda r: f"hello {r['user'].name}"],
    })
    ```
    """

    def __init__(self, **settings: "Any") -> None:
        self.config = Config(**settings)

    async def resolve(
        self, flow_config: "Mapping[str, Any]", concurrency: int | None = None
    ) -> dict[str, "Any"]:
        """Resolve every task in the flow config and return their results by name."""
        if concurrency is None:
            concurrency = self.config.concurrency

        flow = Flow.from_config(flow_config)
        return await Executor(flow, concurrency=concurrency).run()

    def resolve_sync(
        self, flow_config: "Mapping[str, Any]", concurrency: int | None = None
    ) -> dict[str, "Any"]:
        """Resolve a flow config from synchronous code, outside of any event loop."""
        try:
            sniffio.current_async_library()
            raise RuntimeError(
                "Resolving synchronously within an event loop is forbidden as it would"
                " block the loop. Use `await resolve(...)` instead."
            )
        except sniffio.AsyncLibraryNotFoundError:
            return anyio.run(
                partial(self.resolve, flow_config, concurrency),
                backend=self.config.async_backend,
            )


async def resolve(
    flow_config: "Mapping[str, Any]", concurrency: int | None = None
) -> dict[str, "Any"]:
    return await Resolver().resolve(flow_config, concurrency=concurrency)


def resolve_sync(
    flow_config: "Mapping[str, Any]", concurrency: int | None = None
) -> dict[str, "Any"]:
    return Resolver().resolve_sync(flow_config, concurrency=concurrency)
