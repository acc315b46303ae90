"""
Domain models for GroupMe data.

All models are immutable Pydantic models built from decoded API payloads.
Fields the client does not use are ignored rather than rejected, so new
server-side fields never break decoding.
"""

from typing import Any, ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GroupMeModel(BaseModel):
    """Base model for every entity returned by the API."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Member(GroupMeModel):
    """A member of a group."""
    user_id: str
    nickname: str = ""
    id: Optional[str] = None
    image_url: Optional[str] = None
    muted: bool = False
    autokicked: bool = False


class Attachment(GroupMeModel):
    """A message attachment (image, location, mentions, emoji, ...).

    Only ``type`` is common to every attachment; the remaining fields depend
    on the type and are kept as extra data.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str

    @property
    def data(self) -> Dict[str, Any]:
        """Type-specific fields of the attachment."""
        return dict(self.model_extra or {})


class MessagesSummary(GroupMeModel):
    """Summary of a group's message history embedded in the group payload."""
    count: int = 0
    last_message_id: Optional[str] = None
    last_message_created_at: Optional[int] = None


class Group(GroupMeModel):
    """A GroupMe group the user belongs to."""
    id: str = Field(min_length=1)
    name: str = ""
    type: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    creator_user_id: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    share_url: Optional[str] = None
    members: Tuple[Member, ...] = ()
    messages: MessagesSummary = Field(default_factory=MessagesSummary)

    @field_validator("members", mode="before")
    @classmethod
    def _none_members(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("messages", mode="before")
    @classmethod
    def _none_summary(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def message_count(self) -> int:
        return self.messages.count

    def get_member(self, user_id: str) -> Optional[Member]:
        """Find a member by user id."""
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None


class Message(GroupMeModel):
    """A single message posted to a group."""
    id: str = Field(min_length=1)
    group_id: str = Field(min_length=1)
    user_id: str = ""
    name: str = ""
    created_at: int
    text: Optional[str] = None
    source_guid: Optional[str] = None
    avatar_url: Optional[str] = None
    system: bool = False
    attachments: Tuple[Attachment, ...] = ()
    favorited_by: Tuple[str, ...] = ()

    @field_validator("attachments", "favorited_by", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def like_count(self) -> int:
        """Number of users who liked this message."""
        return len(self.favorited_by)

    def is_liked_by(self, user_id: str) -> bool:
        return user_id in self.favorited_by


class GroupMessages(GroupMeModel):
    """One page of messages from a group.

    The order of ``messages`` is exactly what the server returned: pages
    fetched with ``after_id`` are oldest-first, pages fetched with
    ``before_id`` are newest-first. Nothing here re-sorts them.
    """

    MAX_MESSAGES: ClassVar[int] = 100

    count: Optional[int] = None
    messages: Tuple[Message, ...] = ()

    @field_validator("messages", mode="before")
    @classmethod
    def _none_messages(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("messages")
    @classmethod
    def _check_page_size(cls, v: Tuple[Message, ...]) -> Tuple[Message, ...]:
        if len(v) > cls.MAX_MESSAGES:
            raise ValueError(
                f"Page holds {len(v)} messages, more than the maximum of {cls.MAX_MESSAGES}"
            )
        return v

    @property
    def is_exhausted(self) -> bool:
        """True when no further page exists in the direction this page was fetched."""
        return len(self.messages) < self.MAX_MESSAGES

    @property
    def last(self) -> Optional[Message]:
        """Last message of the page, the cursor for the next request."""
        return self.messages[-1] if self.messages else None
