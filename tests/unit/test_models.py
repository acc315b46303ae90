"""Tests for the domain models."""

import pytest
from pydantic import ValidationError

from groupme_utils.core.models import Attachment, Group, GroupMessages, Message

from conftest import group_payload, message_payload


class TestMessage:
    """Test cases for Message."""

    def test_like_count(self):
        message = Message.model_validate(message_payload(1, favorited_by=["2", "3"]))
        assert message.like_count == 2
        assert message.is_liked_by("3")
        assert not message.is_liked_by("1")

    def test_null_lists_become_empty(self):
        payload = message_payload(1)
        payload["favorited_by"] = None
        payload["attachments"] = None
        message = Message.model_validate(payload)

        assert message.favorited_by == ()
        assert message.attachments == ()

    def test_attachment_extra_data(self):
        payload = message_payload(1)
        payload["attachments"] = [{"type": "image", "url": "https://i.groupme.com/x.png"}]
        message = Message.model_validate(payload)

        attachment = message.attachments[0]
        assert isinstance(attachment, Attachment)
        assert attachment.type == "image"
        assert attachment.data == {"url": "https://i.groupme.com/x.png"}

    def test_immutable(self):
        message = Message.model_validate(message_payload(1))
        with pytest.raises(ValidationError):
            message.text = "edited"

    def test_empty_id_rejected(self):
        payload = message_payload(1)
        payload["id"] = ""
        with pytest.raises(ValidationError):
            Message.model_validate(payload)

    def test_unknown_fields_ignored(self):
        payload = message_payload(1)
        payload["platform"] = "gm"
        assert Message.model_validate(payload).id == "1001"


class TestGroup:
    """Test cases for Group."""

    def test_message_count_and_members(self):
        group = Group.model_validate(group_payload(count=12))
        assert group.message_count == 12
        assert group.get_member("2").nickname == "Bob"
        assert group.get_member("99") is None

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Group.model_validate(group_payload(group_id=""))


class TestGroupMessages:
    """Test cases for GroupMessages."""

    def test_max_messages(self):
        assert GroupMessages.MAX_MESSAGES == 100

    def test_short_page_is_exhausted(self):
        page = GroupMessages.model_validate({"messages": [message_payload(1)]})
        assert page.is_exhausted
        assert page.last.id == "1001"

    def test_empty_page(self):
        page = GroupMessages.model_validate({"count": 0, "messages": []})
        assert page.is_exhausted
        assert page.last is None

    def test_full_page_not_exhausted(self):
        page = GroupMessages.model_validate({"messages": [message_payload(i) for i in range(100)]})
        assert not page.is_exhausted

    def test_too_many_messages(self):
        with pytest.raises(ValidationError):
            GroupMessages.model_validate({"messages": [message_payload(i) for i in range(101)]})
