"""
CSV exports of a group's message history.

Both exports walk the history forward from the beginning, so rows come out
in chronological order, and advance an optional progress bar once per
message.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..core.client import GroupMeClient
from ..core.models import Group, Message
from ..utils.csv_writer import CSVWriter
from ..utils.progress import ProgressBar
from .history import iter_messages_after

logger = logging.getLogger(__name__)

MESSAGE_COLUMNS = ["id", "created_at", "user_id", "name", "text", "like_count"]
AUTHOR_COLUMN = "author"


@dataclass
class ExportSummary:
    """Result of an export run."""
    group_id: str
    path: Path
    messages: int
    rows: int


def message_row(message: Message) -> Dict[str, object]:
    return {
        "id": message.id,
        "created_at": message.created_at,
        "user_id": message.user_id,
        "name": message.name,
        "text": message.text,
        "like_count": message.like_count,
    }


def export_messages(
    client: GroupMeClient,
    group: Group,
    path: Union[str, Path],
    progress: Optional[ProgressBar] = None,
    empty_value: str = "",
) -> ExportSummary:
    """Write one row per message of the group to a CSV file."""
    writer = CSVWriter(MESSAGE_COLUMNS, empty_value=empty_value)

    count = 0
    for message in iter_messages_after(client, group.id):
        writer.add_row(message_row(message))
        count += 1
        if progress is not None:
            progress.update()

    rows = writer.write_to(path)
    logger.info(f"Exported {count} messages of group {group.id} to {path}")
    return ExportSummary(group_id=group.id, path=Path(path), messages=count, rows=rows)


def display_name(group: Group, user_id: str, fallback: Optional[str] = None) -> str:
    """Best name for a user: group nickname, then the given fallback, then the id."""
    member = group.get_member(user_id)
    if member is not None and member.nickname:
        return member.nickname
    return fallback or user_id


def column_labels(names: Dict[str, str], reserved: Iterable[str] = ()) -> Dict[str, str]:
    """
    Map user ids to unique CSV labels.

    A name shared by several users, or equal to a reserved label, gets the
    user id appended, e.g. ``Sam (2)``.
    """
    taken = Counter(names.values())
    reserved = set(reserved)
    labels = {}
    for user_id, name in names.items():
        if taken[name] > 1 or name in reserved:
            name = f"{name} ({user_id})"
        labels[user_id] = name
    return labels


def export_like_matrix(
    client: GroupMeClient,
    group: Group,
    path: Union[str, Path],
    progress: Optional[ProgressBar] = None,
    empty_value: str = "0",
) -> ExportSummary:
    """
    Write a matrix of who liked whose messages.

    Each row is a message author, each further column a user who liked at
    least one message, and each cell the number of that author's messages
    the user liked. Pairs with no likes get ``empty_value``. Counts are
    keyed by user id, so users sharing a nickname stay apart.
    """
    likes: Dict[str, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    names: Dict[str, str] = {}
    authors: Dict[str, None] = {}
    likers: Dict[str, None] = {}

    count = 0
    for message in iter_messages_after(client, group.id):
        count += 1
        if progress is not None:
            progress.update()
        if message.system or not message.user_id:
            continue

        authors.setdefault(message.user_id)
        names.setdefault(message.user_id, display_name(group, message.user_id, message.name))
        row = likes[message.user_id]
        for liker_id in message.favorited_by:
            likers.setdefault(liker_id)
            names.setdefault(liker_id, display_name(group, liker_id))
            row[liker_id] += 1

    labels = column_labels(names, reserved=[AUTHOR_COLUMN])
    writer = CSVWriter([AUTHOR_COLUMN] + [labels[user_id] for user_id in likers], empty_value=empty_value)
    for user_id in sorted(authors, key=lambda user_id: labels[user_id].lower()):
        row = {labels[liker_id]: n for liker_id, n in likes[user_id].items()}
        row[AUTHOR_COLUMN] = labels[user_id]
        writer.add_row(row)

    rows = writer.write_to(path)
    logger.info(f"Wrote like matrix for {rows} authors of group {group.id} to {path}")
    return ExportSummary(group_id=group.id, path=Path(path), messages=count, rows=rows)
