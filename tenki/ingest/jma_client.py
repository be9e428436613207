"""JMA forecast feed client."""

import logging

import httpx

from tenki.models.common import AreaCode, TenkiError

logger = logging.getLogger(__name__)

JMA_FORECAST_BASE_URL = "https://www.jma.go.jp/bosai/forecast/data/forecast"
DEFAULT_USER_AGENT = "tenki/0.1.0"


class TransportError(TenkiError):
    """Raised when the feed cannot be retrieved."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def feed_url(area_code: AreaCode, base_url: str = JMA_FORECAST_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{area_code}.json"


class JmaClient:
    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
    ):
        self.user_agent = user_agent
        self.timeout = timeout

    def fetch(self, url: str) -> str:
        """Fetch the raw feed text from url.

        Any non-2xx status or connection failure raises TransportError.
        There is no retry; the caller re-runs the whole pipeline instead.
        """
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            resp = httpx.get(url, headers=headers, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.warning("JMA request error for %s: %s", url, e)
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not resp.is_success:
            logger.warning("JMA %s returned %d", url, resp.status_code)
            raise TransportError(
                f"Failed to fetch forecast: HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError(
                f"Response from {url} is not UTF-8: {e}",
                status_code=resp.status_code,
            ) from e
