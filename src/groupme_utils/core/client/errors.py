"""
Structured error system for the GroupMe API client.

Every failure raised by the client derives from GroupMeError, so callers
can catch one type and still inspect the specific kind, status and details.
"""

from typing import Any, Dict, Optional


class GroupMeError(Exception):
    """Base exception for all GroupMe API related errors."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.status:
            parts.append(f"(Status: {self.status})")
        if self.code:
            parts.append(f"(Code: {self.code})")
        return " ".join(parts)


class MalformedRequestError(GroupMeError):
    """A request URL could not be built from the given target and parameters."""

    def __init__(
        self,
        message: str = "Malformed request URL",
        url: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="MALFORMED_REQUEST", **kwargs)
        if url:
            self.details["url"] = url


class TransportError(GroupMeError):
    """The HTTP request could not be completed."""

    def __init__(
        self,
        message: str = "Request failed",
        url: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="TRANSPORT_ERROR", **kwargs)
        if url:
            self.details["url"] = url


class DecodeError(GroupMeError):
    """A response body did not match the expected entity shape."""

    def __init__(
        self,
        message: str = "Could not decode response",
        shape: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="DECODE_ERROR", **kwargs)
        if shape:
            self.details["shape"] = shape


def create_user_friendly_message(error: GroupMeError) -> str:
    """
    Create a user-friendly error message.

    Args:
        error: The GroupMeError to convert

    Returns:
        User-friendly error message
    """
    if isinstance(error, MalformedRequestError):
        return (
            "Could not build a valid request. Identifiers and cursors must not "
            "contain spaces or reserved URL characters."
        )

    elif isinstance(error, TransportError):
        if error.status == 401:
            return "Authentication failed. Please check the GROUPME_TOKEN environment variable."
        return "Could not reach the GroupMe API. Please check your internet connection and try again."

    elif isinstance(error, DecodeError):
        shape = error.details.get("shape")
        if shape:
            return f"The GroupMe API returned an unexpected response (expected {shape}). The resource may not exist."
        return "The GroupMe API returned an unexpected response."

    else:
        return f"An error occurred: {error.message}"
