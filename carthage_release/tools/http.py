"""HTTP client abstraction for fetching the previous manifest.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from carthage_release import __version__
from carthage_release.core.errors import FetchError
from carthage_release.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpResponse",
    "RealHttpClient",
    "MockHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A completed GET.

    Attributes:
        status: HTTP status code.
        body: Decoded body, or None when the server sent no content.
    """

    status: int
    body: str | None


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests inject canned responses instead of touching the network.
    """

    def get(self, url: str) -> Result[HttpResponse, FetchError]:
        """GET a URL.

        Returns:
            Ok with the response for 2xx statuses, or Err with FetchError
            (status 0 for transport failures).
        """
        ...


class RealHttpClient:
    """Synchronous HTTP client using urllib with system certificates."""

    def __init__(
        self, timeout: float = 30.0, user_agent: str = f"carthage-release/{__version__}"
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def get(self, url: str) -> Result[HttpResponse, FetchError]:
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                status = int(getattr(response, "status", 200))
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(FetchError(url=url, status=e.code, reason=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(FetchError(url=url, status=0, reason=str(e.reason)))
        except TimeoutError:
            return Err(FetchError(url=url, status=0, reason="Request timed out"))
        except ValueError as e:
            # Raised by urllib for strings that are not absolute URLs
            return Err(FetchError(url=url, status=0, reason=str(e)))
        except OSError as e:
            return Err(FetchError(url=url, status=0, reason=str(e)))

        if status < 200 or status >= 300:
            return Err(FetchError(url=url, status=status, reason="Unexpected status"))

        try:
            body = raw.decode("utf-8") if raw else None
        except UnicodeDecodeError as e:
            return Err(FetchError(url=url, status=status, reason=f"Decode error: {e}"))
        return Ok(HttpResponse(status=status, body=body))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_text("https://cdn.example.com/releases.json", "{}")
        client.set_status("https://cdn.example.com/missing.json", 404)
    """

    def __init__(self) -> None:
        self._responses: dict[str, HttpResponse | FetchError] = {}
        self.calls: list[str] = []

    def set_text(self, url: str, body: str | None, status: int = 200) -> None:
        self._responses[url] = HttpResponse(status=status, body=body)

    def set_status(self, url: str, status: int, reason: str = "Mocked") -> None:
        self._responses[url] = FetchError(url=url, status=status, reason=reason)

    def set_error(self, url: str, reason: str) -> None:
        """Simulate a transport failure (no HTTP status)."""
        self._responses[url] = FetchError(url=url, status=0, reason=reason)

    def get(self, url: str) -> Result[HttpResponse, FetchError]:
        self.calls.append(url)

        response = self._responses.get(url)
        if response is None:
            return Err(FetchError(url=url, status=404, reason="Not found (mock)"))
        if isinstance(response, FetchError):
            return Err(response)
        if response.status < 200 or response.status >= 300:
            return Err(FetchError(url=url, status=response.status, reason="Unexpected status"))
        return Ok(response)
