"""Block parser — splits source into paragraphs and runs the inline driver per line."""

from __future__ import annotations

from caretsup.ast import Document, Node, Paragraph, Text
from caretsup.inline import InlineParser
from caretsup.tokens import Segment

_HSPACE = " \t"


def iter_lines(source: str) -> list[tuple[int, int]]:
    """Return (start, stop) offsets of each line, excluding the line terminator."""
    lines: list[tuple[int, int]] = []
    start = 0
    length = len(source)
    while start <= length:
        end = source.find("\n", start)
        if end == -1:
            end = length
        stop = end
        if stop > start and source[stop - 1] == "\r":
            stop -= 1
        if start < length or stop > start:
            lines.append((start, stop))
        start = end + 1
    return lines


def _trim(source: str, start: int, stop: int) -> tuple[int, int]:
    """Narrow a line range past leading and trailing horizontal whitespace."""
    while start < stop and source[start] in _HSPACE:
        start += 1
    while stop > start and source[stop - 1] in _HSPACE:
        stop -= 1
    return start, stop


def parse(source: str, inline: InlineParser, misses: list[int] | None = None) -> Document:
    """Parse source into a Document of paragraphs.

    Blank lines separate paragraphs. Consecutive lines of one paragraph are
    joined by a soft line break.
    """
    paragraphs: list[Paragraph] = []
    children: list[Node] = []
    para_start = para_stop = 0
    prev_newline = -1

    def flush() -> None:
        if children:
            paragraphs.append(Paragraph(tuple(children), Segment(para_start, para_stop)))
            children.clear()

    for line_start, line_stop in iter_lines(source):
        start, stop = _trim(source, line_start, line_stop)
        if start == stop:
            flush()
            continue
        if children:
            # Soft break: the newline that ended the previous line
            children.append(Text(Segment(prev_newline, prev_newline + 1)))
        else:
            para_start = start
        children.extend(inline.parse_line(source, start, stop, misses))
        para_stop = stop
        prev_newline = source.find("\n", line_stop)

    flush()
    return Document(tuple(paragraphs))
