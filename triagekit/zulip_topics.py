"""Zulip topic names and notification messages derived from issues."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Iterable

from .patterns import compile_patterns

log = logging.getLogger(__name__)

_MAX_TOPIC = 60
_ELLIPSIS = "…"


class NotificationType(Enum):
    """The issue change that triggers a Zulip notification."""

    LABELED = auto()
    UNLABELED = auto()
    CLOSED = auto()
    REOPENED = auto()


def topic_from_issue(title: str, topic_reference: str) -> str:
    """Join an issue title and its reference into a topic of at most 60 characters.

    The title is shortened and given an ellipsis when needed. Raises
    ValueError when the reference alone leaves no room for a title.
    """
    room = _MAX_TOPIC - len(topic_reference) - 2
    if room < 0:
        raise ValueError(f"topic reference {topic_reference!r} is too long")
    if len(title) >= room + 2:
        return f"{title[:room]}{_ELLIPSIS} {topic_reference}"
    return f"{title} {topic_reference}"


def truncate_topic(topic: str) -> str:
    """Shorten a topic longer than 60 characters to 59 plus an ellipsis."""
    if len(topic) > _MAX_TOPIC:
        return topic[: _MAX_TOPIC - 1] + _ELLIPSIS
    return topic


def fill_template(template: str, number: int, title: str) -> str:
    """Substitute ``{number}`` and then ``{title}`` in a message template."""
    return template.replace("{number}", str(number)).replace("{title}", title)


def has_all_required_labels(labels: Iterable[str], required_labels: Iterable[str]) -> bool:
    """Whether every required glob pattern matches at least one label.

    Invalid patterns are logged and ignored.
    """
    names = list(labels)
    return all(
        any(pattern.matches(name) for name in names)
        for pattern in compile_patterns(required_labels)
    )