"""Status label changes requested by single-word shortcut commands."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class ShortcutCommand(Enum):
    """A shortcut, valued by the status label it sets."""

    READY = "S-waiting-on-review"
    AUTHOR = "S-waiting-on-author"
    BLOCKED = "S-blocked"


def status_label_changes(
    command: ShortcutCommand, labels: Iterable[str]
) -> tuple[list[str], list[str]]:
    """Return the labels to remove and to add for ``command``.

    Nothing changes when the issue already carries the target label;
    otherwise every other status label is removed and the target added.
    """
    add = command.value
    if add in set(labels):
        return [], []
    remove = [other.value for other in ShortcutCommand if other is not command]
    return remove, [add]