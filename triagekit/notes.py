"""Summary notes that the bot keeps in an issue's top-level text."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

log = logging.getLogger(__name__)

_HEADER = "\n### Summary Notes\n"
_FOOTER = "\n\nGenerated by triagebot, see the Note help page for how to add more"


@dataclass
class NoteDataEntry:
    """One summary note pointing at the comment that created it."""

    title: str
    comment_url: str
    author: str

    def to_markdown(self) -> str:
        """The note as a markdown list item, preceded by a newline."""
        return f'\n- ["{self.title}" by @{self.author}]({self.comment_url})'

    def to_json(self) -> dict[str, str]:
        return {
            "title": self.title,
            "comment_url": self.comment_url,
            "author": self.author,
        }


@dataclass
class NoteData:
    """All summary notes of an issue, keyed by the URL of their comment."""

    entries_by_url: dict[str, NoteDataEntry] = field(default_factory=dict)

    def _sorted_entries(self) -> list[tuple[str, NoteDataEntry]]:
        return sorted(self.entries_by_url.items(), key=lambda item: item[0])

    def get_url_from_title(self, title: str) -> str | None:
        """URL of the first note (in URL order) with this title, or None."""
        return next(
            (url for url, entry in self._sorted_entries() if entry.title == title),
            None,
        )

    def remove_by_title(self, title: str) -> NoteDataEntry | None:
        """Remove and return the first note with this title, or None."""
        url = self.get_url_from_title(title)
        if url is None:
            log.debug("unable to remove entry with title %r", title)
            return None
        entry = self.entries_by_url.pop(url)
        log.debug("removed entry %r", entry)
        return entry

    def add_summary(self, comment_url: str, author: str, title: str) -> NoteDataEntry:
        """Add a note for a comment, or retitle the note it already has."""
        existing = self.entries_by_url.get(comment_url)
        if existing is not None:
            existing.title = title
            log.debug("updated existing entry %r", existing)
            return existing
        entry = NoteDataEntry(title=title, comment_url=comment_url, author=author)
        self.entries_by_url[comment_url] = entry
        log.debug("new note entry %r", entry)
        return entry

    def to_markdown(self) -> str:
        """The notes section text; empty when there are no notes."""
        if not self.entries_by_url:
            return ""
        items = "".join(entry.to_markdown() for _, entry in self._sorted_entries())
        return f"{_HEADER}{items}{_FOOTER}"

    def to_json(self) -> dict[str, Any]:
        """A JSON-ready representation of the notes."""
        return {
            "entries_by_url": {
                url: entry.to_json() for url, entry in self._sorted_entries()
            }
        }

    @classmethod
    def from_json(cls, data: Any) -> NoteData:
        """Build notes from the output of ``to_json``; None gives no notes."""
        if data is None:
            return cls()
        try:
            raw = data["entries_by_url"]
            entries = {
                url: NoteDataEntry(
                    title=item["title"],
                    comment_url=item["comment_url"],
                    author=item["author"],
                )
                for url, item in raw.items()
            }
        except (KeyError, TypeError, AttributeError) as err:
            raise ValueError(f"invalid note data: {data!r}") from err
        return cls(entries_by_url=entries)