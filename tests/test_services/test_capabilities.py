"""Tests for connectivity, location and speech capabilities."""

import asyncio
import socket

import httpx

from weathersphere.services import capabilities
from weathersphere.services.cache import WeatherCache
from weathersphere.services.capabilities import (
    CallbackAnnouncer,
    ConfiguredLocator,
    SocketConnectivity,
    StaticConnectivity,
)
from weathersphere.services.preferences import Preferences
from weathersphere.services.weather_service import WeatherService


async def run_with_ticker(coro):
    """Await ``coro`` while a ticker measures the longest event-loop stall."""
    loop = asyncio.get_running_loop()
    gaps = []
    done = asyncio.Event()

    async def ticker():
        last = loop.time()
        while not done.is_set():
            await asyncio.sleep(0.01)
            now = loop.time()
            gaps.append(now - last)
            last = now

    task = asyncio.create_task(ticker())
    try:
        result = await coro
    finally:
        done.set()
        await task
    return result, max(gaps, default=0.0)


async def hang(*args, **kwargs):
    await asyncio.sleep(10)


def free_port():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class TestSocketConnectivity:
    """Tests for the TCP reachability probe."""

    def test_parses_api_base(self):
        probe = SocketConnectivity("https://weather.example.com/api")
        assert probe.host == "weather.example.com"
        assert probe.port == 443
        assert SocketConnectivity("http://localhost:5000/api").port == 5000

    def test_listening_server(self):
        async def scenario():
            server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
            port = server.sockets[0].getsockname()[1]
            async with server:
                return await SocketConnectivity(f"http://127.0.0.1:{port}/api").is_online()

        assert asyncio.run(scenario()) is True

    def test_refused_connection(self):
        probe = SocketConnectivity(f"http://127.0.0.1:{free_port()}/api", timeout=1.0)
        assert asyncio.run(probe.is_online()) is False

    def test_unanswered_probe_times_out_without_stalling(self, monkeypatch):
        monkeypatch.setattr(capabilities.asyncio, "open_connection", hang)
        probe = SocketConnectivity("http://backend.test:5000/api", timeout=0.3)

        online, max_gap = asyncio.run(run_with_ticker(probe.is_online()))
        assert online is False
        assert max_gap < 0.2

    def test_load_keeps_loop_responsive(
        self, monkeypatch, memory_store, clock, weather_payload
    ):
        """A slow probe during a search must not freeze other tasks."""
        monkeypatch.setattr(capabilities.asyncio, "open_connection", hang)
        cache = WeatherCache(memory_store, clock=clock)
        cache.save("london", weather_payload, {})
        service = WeatherService(
            "http://backend.test:5000/api",
            cache,
            Preferences(memory_store),
            connectivity=SocketConnectivity("http://backend.test:5000/api", timeout=0.3),
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        result, max_gap = asyncio.run(run_with_ticker(service.load_city("London")))
        assert result.degraded is True
        assert result.error == "offline"
        assert max_gap < 0.2


class TestOtherCapabilities:
    def test_static_connectivity(self):
        connectivity = StaticConnectivity(online=False)
        assert asyncio.run(connectivity.is_online()) is False
        connectivity.online = True
        assert asyncio.run(connectivity.is_online()) is True

    def test_configured_locator(self):
        assert ConfiguredLocator(48.85, 2.35).locate() == (48.85, 2.35)
        assert ConfiguredLocator(None, 2.35).locate() is None

    def test_callback_announcer(self):
        spoken = []
        CallbackAnnouncer(spoken.append).speak("Weather in Paris: 20 degrees")
        assert spoken == ["Weather in Paris: 20 degrees"]
