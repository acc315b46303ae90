"""
Walking a group's message history page by page.

The client fetches exactly one page per call. These helpers are the caller
side of pagination: they feed the last message of each page back in as the
next cursor and stop after the first page shorter than MAX_MESSAGES.

Forward walks (after_id) yield oldest-first pages, backward walks
(before_id) yield newest-first pages, because that is how the server
orders them. Concatenating a forward walk gives the history in ascending
time order; concatenating a backward walk gives it in descending order.
"""

import logging
from typing import Callable, Iterator, Optional

from ..core.client import DecodeError, GroupMeClient
from ..core.models import GroupMessages, Message

logger = logging.getLogger(__name__)

# Cursor that precedes every message id, so a forward walk from it covers
# the whole history.
BEGINNING_CURSOR = "0"

# The messages endpoint answers 304 with an empty body when nothing is left
# in the requested direction.
NOT_MODIFIED = 304


def _fetch_page(
    fetch: Callable[[str, str], GroupMessages],
    group_id: str,
    cursor: str,
) -> Optional[GroupMessages]:
    """Fetch one page, or None when the server reports nothing left (304).

    Any other undecodable response still raises DecodeError.
    """
    try:
        return fetch(group_id, cursor)
    except DecodeError as e:
        if e.status != NOT_MODIFIED:
            raise
        logger.debug(f"No messages left at cursor {cursor} of group {group_id}")
        return None

def iter_pages_after(
    client: GroupMeClient,
    group_id: str,
    after_id: str = BEGINNING_CURSOR,
    max_pages: Optional[int] = None,
) -> Iterator[GroupMessages]:
    """Yield pages moving forward in time from after_id."""
    cursor = after_id
    pages = 0
    while max_pages is None or pages < max_pages:
        page = _fetch_page(client.get_messages_after, group_id, cursor)
        if page is None:
            return
        pages += 1
        logger.debug(f"Page {pages} after {cursor}: {len(page.messages)} messages")
        yield page

        if page.is_exhausted:
            return
        cursor = page.last.id


def iter_pages_before(
    client: GroupMeClient,
    group_id: str,
    before_id: str,
    max_pages: Optional[int] = None,
) -> Iterator[GroupMessages]:
    """Yield pages moving backward in time from before_id."""
    cursor = before_id
    pages = 0
    while max_pages is None or pages < max_pages:
        page = _fetch_page(client.get_messages_before, group_id, cursor)
        if page is None:
            return
        pages += 1
        logger.debug(f"Page {pages} before {cursor}: {len(page.messages)} messages")
        yield page

        if page.is_exhausted:
            return
        cursor = page.last.id


def iter_messages_after(
    client: GroupMeClient,
    group_id: str,
    after_id: str = BEGINNING_CURSOR,
) -> Iterator[Message]:
    """Yield every message after after_id, oldest first."""
    for page in iter_pages_after(client, group_id, after_id):
        yield from page.messages


def iter_messages_before(
    client: GroupMeClient,
    group_id: str,
    before_id: str,
) -> Iterator[Message]:
    """Yield every message before before_id, newest first."""
    for page in iter_pages_before(client, group_id, before_id):
        yield from page.messages
