"""
GroupMe API client.

GroupMeClient turns domain operations into single HTTP requests and
decodes the responses into the models from ``groupme_utils.core.models``.
It keeps no state between calls other than the access token, performs one
request per call and never loops over pages; walking a whole history is
left to the caller (see ``groupme_utils.services.history``).
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ...config.settings import GroupMeSettings
from ..models import Group, GroupMessages, Message
from .decoder import EntityDecoder, EntityShape
from .errors import DecodeError, MalformedRequestError, TransportError
from .transport import HttpxTransport, Transport, TransportResponse
from .urls import BASE_URL, URLBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeResult:
    """
    Outcome of a like or unlike request.

    ``succeeded`` only says that the transport delivered a response; the
    status code and body are not consulted, so an error response from the
    server still counts as success. ``status_ok`` exposes the stricter
    reading for callers that want it.
    """
    succeeded: bool
    status_code: Optional[int] = None
    body: bytes = b""
    error: Optional[TransportError] = None

    def __bool__(self) -> bool:
        return self.succeeded

    @property
    def status_ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @classmethod
    def from_response(cls, response: Optional[TransportResponse]) -> "LikeResult":
        if response is None:
            return cls(succeeded=False)
        return cls(succeeded=True, status_code=response.status_code, body=response.content)


MessageRef = Union[Message, str]


class GroupMeClient:
    """Typed access to the GroupMe v3 REST API."""

    def __init__(
        self,
        token: str,
        transport: Optional[Transport] = None,
        decoder: Optional[EntityDecoder] = None,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
    ):
        if not token:
            raise MalformedRequestError("An access token is required")

        self.urls = URLBuilder(token, base_url)
        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(timeout=timeout)
        self.decoder = decoder or EntityDecoder()

    @classmethod
    def from_settings(cls, settings: GroupMeSettings, transport: Optional[Transport] = None) -> "GroupMeClient":
        """Create a client from GroupMeSettings."""
        return cls(
            token=settings.token or "",
            transport=transport,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    # Groups

    def get_groups(self) -> Tuple[Group, ...]:
        """Return the groups the user is in."""
        url = self.urls.build_url("/groups")
        response = self.transport.get(url)
        return self._decode(response, EntityShape.GROUP_LIST)

    list_groups = get_groups

    def get_group(self, group_id: str) -> Group:
        """Return the group with the given id.

        A nonexistent id is not special-cased: whatever the server sends is
        decoded, and an error or empty body surfaces as DecodeError.
        """
        self._require_id("group_id", group_id)
        url = self.urls.build_url(f"/groups/{group_id}")
        response = self.transport.get(url)
        return self._decode(response, EntityShape.GROUP)

    # Messages

    def get_messages_after(self, group_id: str, after_id: str) -> GroupMessages:
        """
        Return up to MAX_MESSAGES messages immediately following after_id.

        The page is ordered by created_at ascending: the oldest message is at
        index 0, so the last message is the cursor for the next page forward.
        """
        return self._get_message_page(group_id, "after_id", after_id)

    def get_messages_before(self, group_id: str, before_id: str) -> GroupMessages:
        """
        Return up to MAX_MESSAGES messages immediately preceding before_id.

        The page is ordered by created_at descending: the newest message is at
        index 0, so the last message is the cursor for the next page backward.
        """
        return self._get_message_page(group_id, "before_id", before_id)

    def _get_message_page(self, group_id: str, cursor_param: str, cursor: str) -> GroupMessages:
        self._require_id("group_id", group_id)
        params = {
            cursor_param: str(cursor),
            "limit": str(GroupMessages.MAX_MESSAGES),
        }
        url = self.urls.build_url(f"/groups/{group_id}/messages", params)
        response = self.transport.get(url)
        # Order is kept exactly as the server sent it.
        return self._decode(response, EntityShape.MESSAGE_PAGE)

    def _decode(self, response: TransportResponse, shape: EntityShape):
        """Decode a response body, attaching the HTTP status to any DecodeError."""
        try:
            return self.decoder.decode(response.content, shape)
        except DecodeError as e:
            if e.status is None:
                e.status = response.status_code
            raise

    # Likes

    def like_message(self, message: MessageRef, message_id: Optional[str] = None) -> LikeResult:
        """
        Like a message.

        Accepts either a Message or a group id followed by a message id.
        """
        group_id, message_id = self._resolve_message(message, message_id)
        return self._post_like(group_id, message_id, "like")

    def unlike_message(self, message: MessageRef, message_id: Optional[str] = None) -> LikeResult:
        """
        Unlike a message.

        Accepts either a Message or a group id followed by a message id.
        """
        group_id, message_id = self._resolve_message(message, message_id)
        return self._post_like(group_id, message_id, "unlike")

    def _post_like(self, group_id: str, message_id: str, action: str) -> LikeResult:
        url = self.urls.build_url(f"/messages/{group_id}/{message_id}/{action}")
        try:
            response = self.transport.post(url)
        except TransportError as e:
            logger.debug(f"{action} of message {message_id} in group {group_id} got no response: {e}")
            return LikeResult(succeeded=False, error=e)
        return LikeResult.from_response(response)

    def _resolve_message(self, message: MessageRef, message_id: Optional[str]) -> Tuple[str, str]:
        if isinstance(message, Message):
            if message_id is not None:
                raise TypeError("message_id must not be given together with a Message")
            return message.group_id, message.id

        if message_id is None:
            raise TypeError("message_id is required when a group id is given")
        self._require_id("group_id", message)
        self._require_id("message_id", message_id)
        return message, message_id

    @staticmethod
    def _require_id(name: str, value: str) -> None:
        if not value:
            raise MalformedRequestError(f"{name} must be a non-empty identifier")

    # Resource management

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "GroupMeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
