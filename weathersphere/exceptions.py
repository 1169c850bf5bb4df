"""Error types shared by the API server and the dashboard."""


class WeatherSphereError(Exception):
    """Base class for all WeatherSphere errors."""


class QueryValidationError(WeatherSphereError):
    """A required query parameter is missing or malformed."""


class ConfigurationError(WeatherSphereError):
    """The process is missing required configuration (e.g. the API key)."""


class UpstreamError(WeatherSphereError):
    """The weather provider returned an error or could not be reached.

    ``status`` is the provider's HTTP status, or None when no response was
    received at all.
    """

    def __init__(self, status: int | None, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class ClientNetworkError(WeatherSphereError):
    """The dashboard could not reach the backend."""


class BackendError(WeatherSphereError):
    """The backend answered with a non-success status."""

    def __init__(self, status: int, message: str, details: str = ""):
        super().__init__(f"{message}: {details}" if details else message)
        self.status = status
        self.message = message
        self.details = details
