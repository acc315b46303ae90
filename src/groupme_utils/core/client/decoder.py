"""
Decoding of GroupMe API responses into domain models.

Every API response is wrapped in an envelope::

    {"response": <payload>, "meta": {"code": 200}}

Each entity shape has its own pure decode function taking the unwrapped
payload. The functions are collected in a single mapping that the
EntityDecoder consults; nothing about it is mutable after construction.
"""

import json
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..models import Group, GroupMessages, Message
from .errors import DecodeError


class EntityShape(Enum):
    """Shapes a response body can be decoded into."""
    GROUP = "group"
    GROUP_LIST = "group_list"
    MESSAGE = "message"
    MESSAGE_PAGE = "message_page"


def decode_group(payload: Any) -> Group:
    return Group.model_validate(payload)


def decode_group_list(payload: Any) -> Tuple[Group, ...]:
    if not isinstance(payload, list):
        raise ValueError(f"expected a list of groups, got {type(payload).__name__}")
    return tuple(Group.model_validate(item) for item in payload)


def decode_message(payload: Any) -> Message:
    # Single-message endpoints nest the message one level deeper.
    if isinstance(payload, dict) and isinstance(payload.get("message"), dict):
        payload = payload["message"]
    return Message.model_validate(payload)


def decode_message_page(payload: Any) -> GroupMessages:
    return GroupMessages.model_validate(payload)


DEFAULT_DECODERS: Mapping[EntityShape, Callable[[Any], Any]] = MappingProxyType({
    EntityShape.GROUP: decode_group,
    EntityShape.GROUP_LIST: decode_group_list,
    EntityShape.MESSAGE: decode_message,
    EntityShape.MESSAGE_PAGE: decode_message_page,
})


def unwrap_envelope(body: bytes) -> Any:
    """
    Parse a response body and return the payload under "response".

    Raises:
        ValueError: If the body is not JSON or the payload is missing
    """
    if not body or not body.strip():
        raise ValueError("response body is empty")

    document = json.loads(body)
    if not isinstance(document, dict):
        raise ValueError("response body is not a JSON object")

    payload = document.get("response")
    if payload is None:
        meta = document.get("meta") or {}
        errors = meta.get("errors") if isinstance(meta, dict) else None
        detail = f": {', '.join(map(str, errors))}" if errors else ""
        raise ValueError(f"response envelope carries no payload{detail}")
    return payload


class EntityDecoder:
    """Decodes raw response bodies into typed values, one rule per shape."""

    def __init__(self, decoders: Optional[Mapping[EntityShape, Callable[[Any], Any]]] = None):
        self._decoders = MappingProxyType(dict(decoders or DEFAULT_DECODERS))

    @property
    def shapes(self) -> Tuple[EntityShape, ...]:
        return tuple(self._decoders)

    def decode(self, body: bytes, shape: EntityShape) -> Any:
        """
        Decode a response body into the given entity shape.

        Args:
            body: Raw response bytes
            shape: Target entity shape

        Returns:
            The decoded value

        Raises:
            DecodeError: If the body does not match the shape
        """
        try:
            rule = self._decoders[shape]
        except KeyError:
            raise DecodeError(f"No decoding rule registered for {shape.value}", shape=shape.value)

        try:
            return rule(unwrap_envelope(body))
        except (ValueError, TypeError) as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            kind = "invalid response" if isinstance(e, ValidationError) else str(e)
            raise DecodeError(
                f"Could not decode {shape.value}: {kind}",
                shape=shape.value,
                original_error=e,
            ) from e
