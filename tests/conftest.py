import pytest


@pytest.fixture(
    params=[
        pytest.param(("asyncio", {"use_uvloop": False}), id="asyncio"),
        pytest.param(
            ("trio", {"restrict_keyboard_interrupt_to_checkpoints": True}), id="trio"
        ),
    ],
    scope="session",
)
def anyio_backend(request):
    return request.param


@pytest.fixture
def no_env_config(monkeypatch):
    for var in ("PROPFLOW_CONCURRENCY", "PROPFLOW_ASYNC_BACKEND"):
        monkeypatch.delenv(var, raising=False)
