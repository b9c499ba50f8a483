"""Shell-style glob patterns used to match label names."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Iterable

log = logging.getLogger(__name__)

_ERROR_WILDCARDS = "wildcards are either regular `*` or recursive `**`"
_ERROR_RECURSIVE_WILDCARDS = "recursive wildcards must form a single path component"
_ERROR_INVALID_RANGE = "invalid range pattern"


class PatternError(ValueError):
    """Raised when a glob pattern cannot be compiled."""

    def __init__(self, pos: int, msg: str) -> None:
        super().__init__(f"Pattern syntax error near position {pos}: {msg}")
        self.pos = pos
        self.msg = msg


class _Kind(Enum):
    LITERAL = auto()
    ANY_CHAR = auto()
    ANY_SEQUENCE = auto()
    ANY_DIRECTORIES = auto()
    CHAR_CLASS = auto()


@dataclass(frozen=True)
class _Token:
    kind: _Kind
    char: str = ""
    negated: bool = False
    ranges: tuple[tuple[str, str], ...] = ()

    def class_matches(self, ch: str) -> bool:
        inside = any(lo <= ch <= hi for lo, hi in self.ranges)
        return inside != self.negated


def _parse_class(spec: str) -> tuple[tuple[str, str], ...]:
    ranges = []
    pos = 0
    while pos < len(spec):
        if pos + 3 <= len(spec) and spec[pos + 1] == "-":
            ranges.append((spec[pos], spec[pos + 2]))
            pos += 3
        else:
            ranges.append((spec[pos], spec[pos]))
            pos += 1
    return tuple(ranges)


def _tokenize(pattern: str) -> tuple[_Token, ...]:
    tokens: list[_Token] = []
    length = len(pattern)
    pos = 0
    while pos < length:
        ch = pattern[pos]
        if ch == "?":
            tokens.append(_Token(_Kind.ANY_CHAR))
            pos += 1
        elif ch == "*":
            run_end = pos
            while run_end < length and pattern[run_end] == "*":
                run_end += 1
            count = run_end - pos
            if count > 2:
                raise PatternError(pos, _ERROR_WILDCARDS)
            if count == 1:
                tokens.append(_Token(_Kind.ANY_SEQUENCE))
                pos = run_end
                continue
            if pos != 0 and pattern[pos - 1] != "/":
                raise PatternError(pos, _ERROR_RECURSIVE_WILDCARDS)
            if run_end == length:
                tokens.append(_Token(_Kind.ANY_SEQUENCE))
                pos = run_end
            elif pattern[run_end] == "/":
                tokens.append(_Token(_Kind.ANY_DIRECTORIES))
                pos = run_end + 1
            else:
                raise PatternError(pos, _ERROR_RECURSIVE_WILDCARDS)
        elif ch == "[":
            if pos + 4 <= length and pattern[pos + 1] == "!":
                close = pattern.find("]", pos + 3)
                if close != -1:
                    tokens.append(
                        _Token(
                            _Kind.CHAR_CLASS,
                            negated=True,
                            ranges=_parse_class(pattern[pos + 2 : close]),
                        )
                    )
                    pos = close + 1
                    continue
            elif pos + 3 <= length and pattern[pos + 1] != "!":
                close = pattern.find("]", pos + 2)
                if close != -1:
                    tokens.append(
                        _Token(
                            _Kind.CHAR_CLASS,
                            ranges=_parse_class(pattern[pos + 1 : close]),
                        )
                    )
                    pos = close + 1
                    continue
            raise PatternError(pos, _ERROR_INVALID_RANGE)
        else:
            tokens.append(_Token(_Kind.LITERAL, char=ch))
            pos += 1
    return tuple(tokens)


class GlobPattern:
    """A compiled glob pattern supporting ``?``, ``*``, ``**`` and ``[...]``."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._tokens = _tokenize(pattern)

    def __repr__(self) -> str:
        return f"GlobPattern({self.pattern!r})"

    def __str__(self) -> str:
        return self.pattern

    def matches(self, text: str) -> bool:
        """Return whether the whole of ``text`` matches this pattern."""
        tokens = self._tokens
        size = len(text)

        @lru_cache(maxsize=None)
        def step(ti: int, si: int) -> bool:
            if ti == len(tokens):
                return si == size
            token = tokens[ti]
            if token.kind is _Kind.ANY_SEQUENCE:
                return any(step(ti + 1, k) for k in range(si, size + 1))
            if token.kind is _Kind.ANY_DIRECTORIES:
                return step(ti + 1, si) or any(
                    step(ti + 1, k)
                    for k in range(si + 1, size + 1)
                    if text[k - 1] == "/"
                )
            if si >= size:
                return False
            ch = text[si]
            if token.kind is _Kind.LITERAL:
                ok = ch == token.char
            elif token.kind is _Kind.ANY_CHAR:
                ok = True
            else:
                ok = token.class_matches(ch)
            return ok and step(ti + 1, si + 1)

        return step(0, 0)


def compile_patterns(patterns: Iterable[str]) -> list[GlobPattern]:
    """Compile each pattern, logging and skipping the ones that are invalid."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(GlobPattern(pattern))
        except PatternError as error:
            log.error("Invalid glob pattern: %s", error)
    return compiled