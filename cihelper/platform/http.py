"""HTTP downloads for release staging.

This module provides:
- HttpClient: Protocol for downloads (injectable for tests)
- RealHttpClient: Implementation using urllib
- MockHttpClient: In-memory implementation for tests
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from cihelper import __version__
from cihelper.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]

_CHUNK_SIZE = 8192


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for downloading a URL to a file."""

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Download ``url`` to ``dest``, creating parent directories.

        Returns:
            Ok with dest path, or Err with HttpError
        """
        ...


class RealHttpClient:
    """HTTP client using urllib with the system certificate store."""

    def __init__(
        self, timeout: float = 60.0, user_agent: str = f"ci-helper/{__version__}"
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    while chunk := response.read(_CHUNK_SIZE):
                        f.write(chunk)
                return Ok(dest)
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Download timed out"))
        except (ValueError, OSError) as e:
            return Err(HttpError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """HTTP client serving canned bodies, for tests.

    Usage:
        client = MockHttpClient()
        client.set_download("https://example.com/EULA.txt", b"terms")
        client.download("https://example.com/EULA.txt", tmp_path / "EULA.txt")
    """

    def __init__(self) -> None:
        self._responses: dict[str, bytes | HttpError] = {}
        self.calls: list[str] = []

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._responses[url] = response

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        self.calls.append(url)

        if url not in self._responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        return Ok(dest)
