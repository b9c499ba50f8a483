"""HTML page listing a user's pending notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
)

_EMPTY = "<p><em>You have no pending notifications! :)</em></p>"

_FOOTER = (
    "<p><em>You can acknowledge a notification by sending </em><code>ack &lt;idx&gt;</code><em> "
    "to </em><strong><code>@triagebot</code></strong><em> on Zulip, or you can acknowledge "
    "all notifications by sending </em><code>ack all</code><em>. Read about the other "
    "notification commands in the triagebot documentation.</em></p>"
)


@dataclass(frozen=True)
class Notification:
    """A pending notification for a user."""

    origin_url: str
    short_description: str | None = None
    metadata: str | None = None


def escape_html(text: str) -> str:
    """Escape the characters that are special in HTML text and attributes."""
    return text.translate(_ESCAPES)


def render(user: str, notifications: Iterable[Notification]) -> str:
    """Render the notification listing page for ``user``."""
    items = list(notifications)
    parts = [
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        "<title>Triagebot Notification Data</title>",
        "</head>",
        "<body>",
        f"<h3>Pending notifications for {user}</h3>",
    ]
    if not items:
        parts.append(_EMPTY)
    else:
        parts.append("<ol>")
        for item in items:
            label = item.short_description
            if label is None:
                label = item.origin_url
            parts.append("<li>")
            parts.append(f"<a href='{item.origin_url}'>{escape_html(label)}</a>")
            if item.metadata is not None:
                parts.append(f"<ul><li>{escape_html(item.metadata)}</li></ul>")
            parts.append("</li>")
        parts.append("</ol>")
        parts.append(_FOOTER)
    parts.append("</body>")
    parts.append("</html>")
    return "".join(parts)