"""Shared fixtures for pwnedcheck tests.

The Pwned Passwords service is replaced by an in-process aiohttp
application that serves canned range bodies per prefix and records
every request it receives.
"""

import asyncio
import threading

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from pwnedcheck.config import CheckerConfig

# SHA-1("password")
PASSWORD_DIGEST = "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8"
PASSWORD_PREFIX = "5BAA6"
PASSWORD_SUFFIX = "1E4C9B93F3F0682250B6CF8331B7EE68FD8"
PASSWORD_COUNT = 52256179

PASSWORD_RANGE_BODY = "\r\n".join([
    "1D2DA4053E34E76F6576ED1DA63134B5E2A:2",
    "1D72CD07550416C216D8AD296BF5C0AE8E0:10",
    f"{PASSWORD_SUFFIX}:{PASSWORD_COUNT}",
    "1F2B668E8AABEF1C59E9EC6F82E3F3CD786:1",
    "20597F5AC10A2F67701B4AD1D3A09F72250:3",
])


class FakeRangeService:
    """Stand-in for the range endpoint."""

    def __init__(self):
        self.ranges: dict[str, str] = {PASSWORD_PREFIX: PASSWORD_RANGE_BODY}
        self.raw_ranges: dict[str, bytes] = {}
        self.statuses: dict[str, int] = {}
        self.delays: dict[str, float] = {}
        self.requests: list[dict] = []
        self.base_url = ""

    async def handle(self, request: web.Request) -> web.Response:
        prefix = request.match_info["prefix"]
        self.requests.append({
            "path": request.path,
            "query": dict(request.query),
            "headers": dict(request.headers),
        })

        if prefix in self.delays:
            await asyncio.sleep(self.delays[prefix])
        if prefix in self.statuses:
            return web.Response(status=self.statuses[prefix], text="Service unavailable")
        if prefix in self.raw_ranges:
            return web.Response(body=self.raw_ranges[prefix], content_type="text/plain")
        return web.Response(text=self.ranges.get(prefix, ""))


@pytest_asyncio.fixture
async def range_service():
    service = FakeRangeService()
    app = web.Application()
    app.router.add_get("/range/{prefix}", service.handle)

    server = TestServer(app)
    await server.start_server()
    service.base_url = str(server.make_url("")).rstrip("/")
    yield service
    await server.close()


@pytest.fixture
def threaded_range_service():
    """Fake service on its own loop thread, for code that calls asyncio.run itself."""
    service = FakeRangeService()
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()

    async def start():
        app = web.Application()
        app.router.add_get("/range/{prefix}", service.handle)
        runner = web.AppRunner(app)
        await runner.setup()
        await web.TCPSite(runner, "127.0.0.1", 0).start()
        return runner

    runner = asyncio.run_coroutine_threadsafe(start(), loop).result(timeout=10)
    port = runner.addresses[0][1]
    service.base_url = f"http://127.0.0.1:{port}"
    yield service

    asyncio.run_coroutine_threadsafe(runner.cleanup(), loop).result(timeout=10)
    loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=10)
    loop.close()


@pytest.fixture
def service_config(range_service) -> CheckerConfig:
    return CheckerConfig(api_base=range_service.base_url, timeout=5)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of the tests."""
    for name in ("PWNEDCHECK_API_URL", "PWNEDCHECK_TIMEOUT", "PWNEDCHECK_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
