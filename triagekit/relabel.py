"""Decide which labels a user may set or remove through a relabel command."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from .patterns import GlobPattern, PatternError

log = logging.getLogger(__name__)


class TeamMembership(Enum):
    MEMBER = auto()
    OUTSIDER = auto()
    UNKNOWN = auto()


class CheckFilterResult(Enum):
    ALLOW = auto()
    DENY = auto()
    DENY_UNKNOWN = auto()


class MatchPatternResult(Enum):
    ALLOW = auto()
    DENY = auto()
    NO_MATCH = auto()


@dataclass
class RelabelConfig:
    """Label patterns that users outside the teams may apply."""

    allow_unauthenticated: list[str] = field(default_factory=list)


def match_pattern(pattern: str, label: str) -> MatchPatternResult:
    """Match one label against one pattern; a leading ``!`` turns a match into a deny."""
    inverse = pattern.startswith("!")
    if inverse:
        pattern = pattern[1:]
    if not GlobPattern(pattern).matches(label):
        return MatchPatternResult.NO_MATCH
    return MatchPatternResult.DENY if inverse else MatchPatternResult.ALLOW


def check_filter(
    label: str, config: RelabelConfig, is_member: TeamMembership
) -> CheckFilterResult:
    """Decide whether ``label`` may be changed by a user of the given membership.

    Raises ValueError when one of the configured patterns is invalid.
    """
    if is_member is TeamMembership.MEMBER:
        return CheckFilterResult.ALLOW
    matched = False
    for pattern in config.allow_unauthenticated:
        try:
            result = match_pattern(pattern, label)
        except PatternError as err:
            log.error("failed to match pattern %s: %s", pattern, err)
            raise ValueError(f"failed to match pattern {pattern}") from err
        if result is MatchPatternResult.ALLOW:
            matched = True
        elif result is MatchPatternResult.DENY:
            # An explicit deny overrides any allowed pattern.
            matched = False
            break
    if matched:
        return CheckFilterResult.ALLOW
    if is_member is TeamMembership.OUTSIDER:
        return CheckFilterResult.DENY
    return CheckFilterResult.DENY_UNKNOWN