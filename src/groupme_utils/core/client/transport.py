"""
HTTP transport for the GroupMe API client.

A transport performs exactly one blocking request per call and hands back
the raw response. It never inspects bodies and never retries; whether a
non-2xx status counts as a failure is decided by the transport's own
``raise_for_status`` setting.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from groupme_utils import USER_AGENT
from .errors import TransportError
from .urls import redact_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of a completed HTTP exchange."""
    status_code: int
    content: bytes
    url: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(ABC):
    """Interface for objects that perform GET and POST requests."""

    @abstractmethod
    def get(self, url: str) -> TransportResponse:
        """Perform a GET request to a fully-formed URL."""
        pass

    @abstractmethod
    def post(self, url: str) -> TransportResponse:
        """Perform a POST request, without body, to a fully-formed URL."""
        pass

    def close(self) -> None:
        """Release any resources held by the transport."""
        pass

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class HttpxTransport(Transport):
    """Transport backed by a blocking httpx.Client."""

    def __init__(
        self,
        timeout: float = 30.0,
        raise_for_status: bool = False,
        client: Optional[httpx.Client] = None,
    ):
        self.timeout = timeout
        self.raise_for_status = raise_for_status
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=httpx.Timeout(timeout),
        )

    def get(self, url: str) -> TransportResponse:
        return self._request("GET", url)

    def post(self, url: str) -> TransportResponse:
        return self._request("POST", url)

    def _request(self, method: str, url: str) -> TransportResponse:
        safe_url = redact_token(url)
        logger.debug(f"{method} {safe_url}")

        try:
            response = self._client.request(method, url)
            if self.raise_for_status:
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{method} {safe_url} returned HTTP {e.response.status_code}",
                url=safe_url,
                status=e.response.status_code,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"{method} {safe_url} failed: {e.__class__.__name__}",
                url=safe_url,
                original_error=e,
            ) from e

        logger.debug(f"{method} {safe_url} -> {response.status_code} ({len(response.content)} bytes)")
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            url=url,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
