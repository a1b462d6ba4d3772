"""Superscript delimiter scanner — recognizes ^text^ spans on a single line.

Rules, applied in order at a caret:

1. At least two characters remain (an opening and a closing caret).
2. The caret is not at the start of a line and not preceded by whitespace.
   This keeps ``a^2 + b^2`` literal and leaves ``[^id]`` footnote
   references alone.
3. The caret is not immediately followed by another caret. Doubled carets
   belong to a different construct, registered at a higher priority.
4. A closing caret exists later on the same line. The first one found ends
   the span; spans never nest.
5. The content is not empty.
6. The content contains no whitespace.
7. The content does not start with a caret.

Every failure is a plain "no match": the caret stays literal text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from caretsup.ast import Node, Superscript, Text
from caretsup.tokens import CARET, Segment, is_space


class Rejection(Enum):
    """Why a caret did not open a superscript."""

    TOO_SHORT = "nothing follows the caret on this line"
    AFTER_SPACE = "a superscript cannot start at the beginning of a line or after whitespace"
    DOUBLED = "doubled carets are reserved for another construct"
    UNTERMINATED = "no closing caret on this line"
    EMPTY = "superscript content is empty"
    CONTAINS_SPACE = "superscript content cannot contain whitespace"


@dataclass(frozen=True, slots=True)
class ScanResult:
    """A recognized span and the number of line characters it accounts for."""

    node: Node
    consumed: int


def _check(before: str | None, line: str) -> tuple[Rejection | None, int]:
    """Apply the scanning rules. Returns (rejection, closing caret index)."""
    if len(line) < 2:
        return Rejection.TOO_SHORT, -1
    if is_space(before):
        return Rejection.AFTER_SPACE, -1
    if line[1] == CARET:
        return Rejection.DOUBLED, -1

    close = line.find(CARET, 1)
    if close == -1:
        return Rejection.UNTERMINATED, -1
    if close <= 1:
        return Rejection.EMPTY, close

    content = line[1:close]
    if any(ch.isspace() for ch in content):
        return Rejection.CONTAINS_SPACE, close
    if content[0] == CARET:
        return Rejection.DOUBLED, close
    return None, close


def scan(before: str | None, line: str, offset: int = 0) -> ScanResult | None:
    """Try to recognize a superscript at the start of *line*.

    *before* is the character preceding the caret, or None at the start of a
    line. *line* runs from the caret to the end of the current line, and
    *offset* is the source offset of ``line[0]``; the content segment is
    expressed in source offsets.
    """
    rejection, close = _check(before, line)
    if rejection is not None:
        return None
    node = Superscript((Text(Segment(offset + 1, offset + close)),))
    return ScanResult(node, close + 1)


def explain(before: str | None, line: str) -> Rejection | None:
    """Return why scan() would not match here, or None if it would."""
    rejection, _ = _check(before, line)
    return rejection


def has_closing_caret(line: str) -> bool:
    """Return True if a caret appears after the first character of *line*."""
    return line.find(CARET, 1) != -1


class SuperscriptRule:
    """Inline rule adapter for the superscript scanner."""

    name = "superscript"
    triggers = (CARET,)

    def parse(self, before: str | None, line: str, offset: int) -> ScanResult | None:
        return scan(before, line, offset)
