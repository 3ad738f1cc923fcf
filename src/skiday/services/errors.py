"""Error taxonomy for weather and geocoding providers."""


class SkiDayError(Exception):
    """Base class for ski day checker errors."""


class NotFoundError(SkiDayError):
    """Geocoding returned no result for the requested place."""


class RateLimitedError(SkiDayError):
    """A provider answered HTTP 429. Recoverable: retry shortly."""

    def __init__(self, provider: str, message: str | None = None):
        self.provider = provider
        super().__init__(message or f"{provider} rate limit reached, retry shortly")


class ProviderError(SkiDayError):
    """Non-2xx answer, transport failure or malformed payload from a provider."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")


class ConfigurationError(SkiDayError):
    """A source was selected without the credential or reference it needs."""
