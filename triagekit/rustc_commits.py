"""Parsing of build-completion comments and merge commit messages."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

log = logging.getLogger(__name__)

BORS_GH_ID = 3372342

_MARKER_START = "<!-- homu: "
_MARKER_END = " -->"
_MERGE_PREFIX = "Auto merge of #"
_NUMBER = re.compile(r"\+?[0-9]+")
_U32_LIMIT = 2**32


@dataclass(frozen=True)
class BorsMessage:
    """The machine-readable part of a build-completion comment."""

    type: str
    base_ref: str
    merge_sha: str


def extract_bors_message(body: str) -> BorsMessage | None:
    """Extract the embedded build message from a comment, or None if absent or invalid."""
    start = body.find(_MARKER_START)
    end = body.find(_MARKER_END)
    if start == -1 or end == -1:
        log.warning("Unable to extract build completion from comment %r", body)
        return None
    text = body[start + len(_MARKER_START) : end]
    try:
        data = json.loads(text)
        message = BorsMessage(
            type=data["type"], base_ref=data["base_ref"], merge_sha=data["merge_sha"]
        )
    except (json.JSONDecodeError, KeyError, TypeError) as err:
        log.error("failed to parse build completion from %r: %s", text, err)
        return None
    if not all(isinstance(v, str) for v in (message.type, message.base_ref, message.merge_sha)):
        log.error("failed to parse build completion from %r", text)
        return None
    return message


def pr_number_from_merge_message(message: str) -> int | None:
    """The pull request number from an ``Auto merge of #N ...`` commit message."""
    if not message.startswith(_MERGE_PREFIX):
        return None
    tail = message[len(_MERGE_PREFIX) :]
    end = tail.find(" ")
    if end == -1:
        return None
    digits = tail[:end]
    if not _NUMBER.fullmatch(digits):
        return None
    number = int(digits)
    return number if number < _U32_LIMIT else None