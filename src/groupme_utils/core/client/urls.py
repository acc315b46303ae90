"""
Request URL construction for the GroupMe API.

The API authenticates every request through a ``token`` query parameter,
so every URL built here ends with it. Values are not percent-encoded;
anything that would need encoding is rejected instead.
"""

import re
from typing import Mapping, Optional

import httpx

from .errors import MalformedRequestError

BASE_URL = "https://api.groupme.com/v3"

# Unreserved characters plus the sub-delimiters that are legal inside a
# query value. Excludes '&', '=', '#', '?', whitespace and control chars.
_SAFE_COMPONENT = re.compile(r"[A-Za-z0-9\-._~!$'()*+,;:@/%]*")
_TOKEN_PATTERN = re.compile(r"(token=)[^&]*")


def redact_token(url: str) -> str:
    """Hide the access token in a URL before it is logged or reported."""
    return _TOKEN_PATTERN.sub(r"\1***", url)


class URLBuilder:
    """Builds authenticated request URLs relative to a base endpoint."""

    def __init__(self, token: str, base_url: str = BASE_URL):
        self._token = token
        self.base_url = base_url.rstrip("/")

    def build_url(self, target: str, params: Optional[Mapping[str, str]] = None) -> str:
        """
        Build a request URL for target with params as query parameters.

        Args:
            target: Path below the base endpoint, must start with "/"
            params: Query parameters; order in the result is not guaranteed

        Returns:
            The full URL, always ending with the token parameter

        Raises:
            MalformedRequestError: If the target or a parameter cannot be
                placed in a URL without encoding, or the result does not parse
        """
        params = params or {}

        if not target.startswith("/"):
            raise MalformedRequestError(f"Request target must start with '/': {target!r}")

        url = self.base_url + target + "?"
        for key, value in params.items():
            url += f"{key}={value}&"
        url += f"token={self._token}"

        self._validate(target, params, url)
        return url

    def _validate(self, target: str, params: Mapping[str, str], url: str) -> None:
        if not _SAFE_COMPONENT.fullmatch(target):
            raise MalformedRequestError(
                f"Request target contains characters that are not URL-safe: {target!r}",
                url=redact_token(url),
            )

        for key, value in params.items():
            if not key or not _SAFE_COMPONENT.fullmatch(key):
                raise MalformedRequestError(
                    f"Query parameter name is not URL-safe: {key!r}",
                    url=redact_token(url),
                )
            if not isinstance(value, str) or not _SAFE_COMPONENT.fullmatch(value):
                raise MalformedRequestError(
                    f"Value of query parameter {key!r} is not URL-safe: {value!r}",
                    url=redact_token(url),
                )

        if not _SAFE_COMPONENT.fullmatch(self._token):
            raise MalformedRequestError(
                "Access token contains characters that are not URL-safe",
                url=redact_token(url),
            )

        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise MalformedRequestError(
                f"Failed to create a request URL: {e}",
                url=redact_token(url),
                original_error=e,
            ) from e
