"""Compiler team meetings read from a public calendar."""

from __future__ import annotations

import json
import os
import urllib.parse
import urllib.request
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

CALENDAR_API = "https://www.googleapis.com/calendar/v3/calendars"
CALENDAR_ID = "6u5rrtce6lrtv07pfi3damgjus%40group.calendar.google.com"


@dataclass(frozen=True)
class CompilerMeeting:
    """One calendar event."""

    summary: str
    html_link: str
    original_start: str | None = None
    start: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompilerMeeting:
        """Build a meeting from a calendar API event; raises ValueError on missing fields."""

        def start_of(key: str) -> str | None:
            value = data.get(key)
            if value is None:
                return None
            try:
                return value["dateTime"]
            except (KeyError, TypeError) as err:
                raise ValueError(f"missing field `dateTime` in `{key}`") from err

        try:
            summary = data["summary"]
            html_link = data["htmlLink"]
        except KeyError as err:
            raise ValueError(f"missing field `{err.args[0]}`") from err
        return cls(
            summary=summary,
            html_link=html_link,
            original_start=start_of("originalStartTime"),
            start=start_of("start"),
        )


def calendar_url(api_key: str, start_date: date, end_date: date) -> str:
    """URL listing the single events from the start of one day to the end of another."""
    query = urllib.parse.urlencode(
        [
            ("key", api_key),
            ("timeMin", f"{start_date:%Y-%m-%d}T00:00:00+00:00"),
            ("timeMax", f"{end_date:%Y-%m-%d}T23:59:59+00:00"),
            ("singleEvents", "true"),
        ]
    )
    return f"{CALENDAR_API}/{CALENDAR_ID}/events?{query}"


def get_meetings(
    start_date: date, end_date: date, api_key: str | None = None
) -> list[CompilerMeeting]:
    """Fetch the meetings in a date range.

    Without a key (given or in ``GOOGLE_API_KEY``) no request is made and the
    list is empty.
    """
    if api_key is None:
        api_key = os.environ.get("GOOGLE_API_KEY")
        if api_key is None:
            return []
    with urllib.request.urlopen(calendar_url(api_key, start_date, end_date)) as response:
        data = json.load(response)
    try:
        items = data["items"]
    except (KeyError, TypeError) as err:
        raise ValueError("missing field `items`") from err
    return [CompilerMeeting.from_dict(item) for item in items]