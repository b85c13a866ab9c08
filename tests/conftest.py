"""Shared test fixtures for the loadburst test suite."""

from __future__ import annotations

import asyncio
import logging
import socket
import threading
from typing import TYPE_CHECKING

import pytest
from aiohttp import web

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


@pytest.fixture(autouse=True)
def _reset_loadburst_logger() -> Iterator[None]:
    """Drop handlers bound to streams that a CliRunner may have replaced."""
    yield
    logger = logging.getLogger("loadburst")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# =============================================================================
# Network utilities
# =============================================================================


def _get_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


@pytest.fixture
def unreachable_url() -> str:
    """URL on a localhost port with nothing listening."""
    return f"http://127.0.0.1:{_get_free_port()}/"


# =============================================================================
# Test HTTP server handlers
# =============================================================================


async def _ok_handler(request: web.Request) -> web.Response:
    """Always 200."""
    return web.Response(text="ok")


async def _status_handler(request: web.Request) -> web.Response:
    """Respond with the status code given in the path (``/status/404``)."""
    status = int(request.match_info["code"])
    return web.Response(status=status, text=f"status {status}")


async def _delay_handler(request: web.Request) -> web.Response:
    """Respond after a configurable delay (query param: ?delay=0.5)."""
    delay = float(request.query.get("delay", "0.1"))
    await asyncio.sleep(delay)
    return web.Response(text=f"delayed {delay}")


def _create_test_app() -> web.Application:
    """Build the test server app with all routes."""
    app = web.Application()
    app.router.add_get("/ok", _ok_handler)
    app.router.add_get("/status/{code:\\d+}", _status_handler)
    app.router.add_get("/delay", _delay_handler)
    return app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
async def echo_server() -> AsyncIterator[str]:
    """Aiohttp test server on the test's event loop.

    Returns the base URL (e.g., 'http://127.0.0.1:54321').
    """
    app = _create_test_app()
    port = _get_free_port()
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    yield f"http://127.0.0.1:{port}"
    await runner.cleanup()


@pytest.fixture
def sync_echo_server() -> Iterator[str]:
    """Test server running in a background thread for sync tests.

    The CLI and ``LoadDriver.run`` own their event loop and block the
    main thread, so the server needs its own loop.
    """
    port = _get_free_port()
    started = threading.Event()
    loop_holder: list[asyncio.AbstractEventLoop] = []

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        runner = web.AppRunner(_create_test_app())
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", port)
        loop.run_until_complete(site.start())
        loop_holder.append(loop)
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=_thread_target, daemon=True)
    thread.start()
    started.wait(timeout=5.0)

    yield f"http://127.0.0.1:{port}"

    if loop_holder:
        loop_holder[0].call_soon_threadsafe(loop_holder[0].stop)
    thread.join(timeout=5.0)
