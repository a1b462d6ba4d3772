"""Source positions, segments, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass

CARET = "^"


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Segment:
    """Half-open [start, stop) range of character offsets into a source string.

    A segment never owns text; it is resolved against the source it was
    produced from.
    """

    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start

    def value(self, source: str) -> str:
        return source[self.start : self.stop]


def is_space(ch: str | None) -> bool:
    """Return True if ch is whitespace. None (start of line) counts as whitespace."""
    return ch is None or ch.isspace()
