"""
GroupMe API client package.

This package provides URL construction, the HTTP transport, response
decoding and the GroupMeClient that ties them together.
"""

from .errors import (
    GroupMeError,
    MalformedRequestError,
    TransportError,
    DecodeError,
    create_user_friendly_message,
)
from .urls import BASE_URL, URLBuilder, redact_token
from .transport import Transport, TransportResponse, HttpxTransport
from .decoder import (
    EntityShape,
    EntityDecoder,
    DEFAULT_DECODERS,
    decode_group,
    decode_group_list,
    decode_message,
    decode_message_page,
)
from .groupme import GroupMeClient, LikeResult

__all__ = [
    # Errors
    "GroupMeError",
    "MalformedRequestError",
    "TransportError",
    "DecodeError",
    "create_user_friendly_message",

    # URLs
    "BASE_URL",
    "URLBuilder",
    "redact_token",

    # Transport
    "Transport",
    "TransportResponse",
    "HttpxTransport",

    # Decoding
    "EntityShape",
    "EntityDecoder",
    "DEFAULT_DECODERS",
    "decode_group",
    "decode_group_list",
    "decode_message",
    "decode_message_page",

    # Client
    "GroupMeClient",
    "LikeResult",
]
