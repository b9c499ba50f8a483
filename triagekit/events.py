"""Webhook event names, payload decoding and handler error reporting."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Iterable

log = logging.getLogger(__name__)


class EventName(Enum):
    """The kinds of webhook events the bot distinguishes."""

    PULL_REQUEST = "pull_request"
    PULL_REQUEST_REVIEW = "pull_request_review"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    ISSUE_COMMENT = "issue_comment"
    ISSUE = "issues"
    PUSH = "push"
    CREATE = "create"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def parse_event_name(name: str) -> EventName:
    """Map an event header value to an EventName; unknown names give OTHER."""
    try:
        return EventName(name)
    except ValueError:
        return EventName.OTHER


class PayloadError(ValueError):
    """Raised when a webhook payload is not valid JSON."""

    def __init__(self, msg: str, lineno: int, colno: int) -> None:
        super().__init__(f"{msg} at line {lineno} column {colno}")
        self.msg = msg
        self.lineno = lineno
        self.colno = colno


def deserialize_payload(text: str | bytes) -> Any:
    """Decode a JSON payload, raising PayloadError with the failing position."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as err:
        raise PayloadError(err.msg, err.lineno, err.colno) from err


class HandlerError(Exception):
    """An error produced while handling an event."""


class HandlerMessage(HandlerError):
    """An error whose message is meant to be shown to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class HandlerFailure(HandlerError):
    """An internal failure; its details are logged, not shown."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return "An internal error occurred."


def feature_disabled_message(name: str) -> str:
    """Message telling the user that feature ``name`` is not configured."""
    return (
        f"The feature `{name}` is not enabled in this repository.\n"
        "To enable it add its section in the `triagebot.toml` "
        "in the root of the repository."
    )


def command_parse_failure_message(name: str, url: str, error: object) -> str:
    """Message reporting that a command in a comment could not be parsed."""
    return f"Parsing {name} command in [comment]({url}) failed: {error}"


def summarize_errors(errors: Iterable[HandlerError]) -> tuple[str, bool]:
    """Combine handler errors.

    Returns the user-facing messages joined by blank lines, and whether any
    internal failure occurred (those are logged).
    """
    messages: list[str] = []
    had_failure = False
    for err in errors:
        if isinstance(err, HandlerFailure):
            log.error("handling event failed: %r", err.error)
            had_failure = True
        else:
            messages.append(str(err))
    return "\n\n".join(messages), had_failure