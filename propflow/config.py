from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    concurrency: int | None = None
    """Default cap on concurrently running producers. Non-positive means unbounded."""

    async_backend: Literal["asyncio", "trio"] = "asyncio"
    """Event loop backend used when resolving from synchronous code."""

    model_config = SettingsConfigDict(env_prefix="PROPFLOW_")
