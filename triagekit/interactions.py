"""Comment bodies and bot-managed sections inside an issue's top-level text."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable

START_BOT = "<!-- TRIAGEBOT_START -->\n\n"
END_BOT = "<!-- TRIAGEBOT_END -->"

_ERROR_FOOTER = (
    "Please file an issue on the triagebot repository if there's a problem "
    "with this bot, or reach out in the infrastructure channel on Zulip."
)


def normalize_body(body: str) -> str:
    """Turn CRLF line endings into LF."""
    return body.replace("\r\n", "\n")


def error_comment_body(message: str) -> str:
    """Text of a comment that reports an error to the user."""
    return f"**Error**: {message}\n\n{_ERROR_FOOTER}\n"


def ping_comment_body(users: Iterable[str]) -> str:
    """Text of a comment that mentions each of ``users``."""
    return "".join(f"@{user} " for user in users)


@dataclass(frozen=True)
class EditIssueBody:
    """A section of an issue body owned by the bot under the marker ``id``."""

    body: str
    id: str

    @property
    def _start_section(self) -> str:
        return f"<!-- TRIAGEBOT_{self.id}_START -->\n"

    @property
    def _end_section(self) -> str:
        return f"\n<!-- TRIAGEBOT_{self.id}_END -->\n"

    @property
    def _data_start(self) -> str:
        return f"\n<!-- TRIAGEBOT_{self.id}_DATA_START$$"

    @property
    def _data_end(self) -> str:
        return f"$$TRIAGEBOT_{self.id}_DATA_END -->\n"

    def _data_section(self, data: Any) -> str:
        encoded = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        return f"{self._data_start}{encoded}{self._data_end}"

    def current(self) -> str | None:
        """The whole section for this id, markers included, or None."""
        body = normalize_body(self.body)
        start = self._start_section
        if START_BOT not in body or start not in body:
            return None
        start_idx = body.index(start)
        end_idx = body.index(self._end_section)
        return body[start_idx : end_idx + len(self._end_section)]

    def current_data(self) -> Any:
        """The JSON data stored in this section, or None if there is no section."""
        section = self.current()
        if section is None:
            return None
        start_idx = section.index(self._data_start) + len(self._data_start)
        end_idx = section.index(self._data_end)
        text = section[start_idx:end_idx]
        try:
            return json.loads(text)
        except json.JSONDecodeError as err:
            raise ValueError(f"deserializing data {text!r} failed: {err}") from err

    def apply(self, text: str, data: Any) -> str:
        """Return the issue body with this section set to ``text`` and ``data``."""
        body = normalize_body(self.body)
        start = self._start_section
        end = self._end_section
        bot_section = f"{start}{text}{self._data_section(data)}{end}"
        empty_bot_section = f"{start}{end}"
        all_new = f"\n\n{START_BOT}{bot_section}{END_BOT}"

        if START_BOT not in body:
            return body + all_new
        if start in body:
            start_idx = body.index(start)
            end_idx = body.index(end) + len(end)
            body = body[:start_idx] + bot_section + body[end_idx:]
            if all_new in body and bot_section == empty_bot_section:
                body = body.replace(all_new, "", 1)
            return body
        end_idx = body.index(END_BOT)
        return body[:end_idx] + bot_section + body[end_idx:]