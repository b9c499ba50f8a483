"""The teams that issues can be routed to."""

from __future__ import annotations

from enum import Enum


class Team(Enum):
    LIBS = "libs"
    COMPILER = "compiler"
    LANG = "lang"

    def label(self) -> str:
        """Name of the label that marks an issue as belonging to this team."""
        return f"T-{self.value}"


def parse_team(text: str) -> Team:
    """Parse a team name; raises ValueError for an unknown team."""
    try:
        return Team(text)
    except ValueError:
        raise ValueError(f'unknown team: "{text}"') from None