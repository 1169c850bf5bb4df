"""Small capability interfaces for environment-dependent features.

Connectivity detection, location lookup and speech output all sit behind
these so the fallback and recommendation logic can run without them.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class Connectivity(ABC):
    """Reports whether the backend is believed reachable."""

    @abstractmethod
    async def is_online(self) -> bool: ...


class StaticConnectivity(Connectivity):
    """Fixed online/offline answer."""

    def __init__(self, online: bool = True):
        self.online = online

    async def is_online(self) -> bool:
        return self.online


class SocketConnectivity(Connectivity):
    """Probe the backend host with a short TCP connect."""

    def __init__(self, api_base: str, timeout: float = 2.0):
        parsed = urlparse(api_base)
        self.host = parsed.hostname or "localhost"
        self.port = parsed.port or (443 if parsed.scheme == "https" else 80)
        self.timeout = timeout

    async def is_online(self) -> bool:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=self.timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug(f"Connectivity probe to {self.host}:{self.port} failed: {e!r}")
            return False
        writer.close()
        return True


class Locator(ABC):
    """Source of the user's current position."""

    @abstractmethod
    def locate(self) -> tuple[float, float] | None:
        """Return (latitude, longitude), or None if unavailable."""


class ConfiguredLocator(Locator):
    """Position taken from configuration."""

    def __init__(self, latitude: float | None, longitude: float | None):
        self.latitude = latitude
        self.longitude = longitude

    def locate(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return self.latitude, self.longitude


class Announcer(ABC):
    """Speech output."""

    @abstractmethod
    def speak(self, text: str) -> None: ...


class NullAnnouncer(Announcer):
    def speak(self, text: str) -> None:
        logger.debug(f"Announcement suppressed: {text}")


class CallbackAnnouncer(Announcer):
    """Hand announcements to a callable (e.g. a UI notification)."""

    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback

    def speak(self, text: str) -> None:
        self.callback(text)
