"""Shared fixtures: canned API payloads and fake transports."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from groupme_utils.core.client import Transport, TransportResponse, TransportError
from groupme_utils.core.models import GroupMessages

TOKEN = "abc"
GROUP_ID = "42"


def envelope(payload: Any, code: int = 200) -> bytes:
    """Wrap a payload the way the GroupMe API does."""
    return json.dumps({"response": payload, "meta": {"code": code}}).encode()


def member_payload(user_id: str, nickname: str) -> Dict[str, Any]:
    return {"id": f"m{user_id}", "user_id": user_id, "nickname": nickname, "muted": False}


def group_payload(group_id: str = GROUP_ID, name: str = "Book Club", count: int = 0) -> Dict[str, Any]:
    return {
        "id": group_id,
        "name": name,
        "type": "private",
        "description": "Monthly reads",
        "creator_user_id": "1",
        "created_at": 1_500_000_000,
        "updated_at": 1_600_000_000,
        "share_url": None,
        "members": [
            member_payload("1", "Alice"),
            member_payload("2", "Bob"),
            member_payload("3", "Carol"),
        ],
        "messages": {"count": count, "last_message_id": None, "last_message_created_at": None},
    }


def message_payload(
    index: int,
    group_id: str = GROUP_ID,
    user_id: str = "1",
    name: str = "Alice",
    favorited_by: Optional[List[str]] = None,
) -> Dict[str, Any]:
    return {
        "id": str(1000 + index),
        "source_guid": f"guid-{index}",
        "created_at": 1_600_000_000 + index * 60,
        "user_id": user_id,
        "group_id": group_id,
        "name": name,
        "avatar_url": None,
        "text": f"message {index}",
        "system": False,
        "favorited_by": favorited_by or [],
        "attachments": [],
    }


class FakeTransport(Transport):
    """Transport returning canned responses and recording every request."""

    def __init__(self, handler: Optional[Callable[[str, str], TransportResponse]] = None):
        self.requests: List[Tuple[str, str]] = []
        self.handler = handler or (lambda method, url: TransportResponse(200, envelope({})))
        self.closed = False

    def get(self, url: str) -> TransportResponse:
        self.requests.append(("GET", url))
        return self.handler("GET", url)

    def post(self, url: str) -> TransportResponse:
        self.requests.append(("POST", url))
        return self.handler("POST", url)

    def close(self) -> None:
        self.closed = True

    @classmethod
    def returning(cls, body: bytes, status_code: int = 200) -> "FakeTransport":
        return cls(lambda method, url: TransportResponse(status_code, body, url))

    @classmethod
    def failing(cls) -> "FakeTransport":
        def handler(method: str, url: str) -> TransportResponse:
            raise TransportError("connection refused", url=url)
        return cls(handler)


class HistoryTransport(FakeTransport):
    """
    Simulates the messages endpoint over a fixed history.

    after_id pages come back oldest first, before_id pages newest first,
    like the real service.
    """

    def __init__(self, messages: List[Dict[str, Any]]):
        super().__init__(self._serve)
        self.history = sorted(messages, key=lambda m: m["created_at"])

    def _serve(self, method: str, url: str) -> TransportResponse:
        params = httpx.URL(url).params
        limit = int(params.get("limit", GroupMessages.MAX_MESSAGES))

        if "after_id" in params:
            cursor = int(params["after_id"])
            newer = [m for m in self.history if int(m["id"]) > cursor]
            page = newer[:limit]
        elif "before_id" in params:
            cursor = int(params["before_id"])
            older = [m for m in self.history if int(m["id"]) < cursor]
            page = list(reversed(older))[:limit]
        else:
            page = list(reversed(self.history))[:limit]

        body = envelope({"count": len(self.history), "messages": page})
        return TransportResponse(200, body, url)


@pytest.fixture
def history() -> List[Dict[str, Any]]:
    """250 messages, one minute apart."""
    return [message_payload(i) for i in range(1, 251)]


@pytest.fixture
def history_transport(history) -> HistoryTransport:
    return HistoryTransport(history)
