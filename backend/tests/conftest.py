"""Pytest configuration and fixtures for async testing."""
import random
import sys
import types
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from insights.config import Settings
from insights.main import app
from insights.runtime import DashboardRuntime, create_runtime


@pytest.fixture(scope="function")
def rng() -> random.Random:
    """
    Seeded random source.

    Returns:
        random.Random: Deterministic random generator
    """
    return random.Random(20250715)


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    """
    Settings for a fast, reproducible runtime.

    The poll interval is long enough that the timer never fires during a
    test; tests drive fetches with the refresh endpoint.
    """
    return Settings(
        app_env="test",
        poll_interval_ms=60_000,
        fetch_latency_min_ms=0,
        fetch_latency_max_ms=0,
        fetch_failure_rate=0.0,
        random_seed=1234,
    )


@pytest_asyncio.fixture(scope="function")
async def runtime(test_settings: Settings) -> AsyncGenerator[DashboardRuntime, None]:
    """
    Running dashboard runtime attached to the app.

    Yields:
        DashboardRuntime: Opened runtime; disposed after the test
    """
    dashboard_runtime = create_runtime(test_settings)
    app.state.runtime = dashboard_runtime
    await dashboard_runtime.controller.open()

    yield dashboard_runtime

    await dashboard_runtime.controller.aclose()
    app.state.runtime = None


@pytest_asyncio.fixture(scope="function")
async def async_client(runtime: DashboardRuntime) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client bound to the app with a live runtime.

    Yields:
        AsyncClient: Async HTTP client for API testing
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture(scope="function")
def fake_weasyprint(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """
    Replace WeasyPrint with a recorder so PDF tests need no system libraries.

    Returns:
        list[str]: HTML documents passed to the renderer
    """
    rendered: list[str] = []

    class HTML:
        def __init__(self, string: str):
            self.string = string

        def write_pdf(self) -> bytes:
            rendered.append(self.string)
            return b"%PDF-1.7 test document"

    module = types.ModuleType("weasyprint")
    module.HTML = HTML
    monkeypatch.setitem(sys.modules, "weasyprint", module)
    return rendered
