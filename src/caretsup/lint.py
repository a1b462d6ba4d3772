"""Lint — reports carets that look like superscripts but do not form one."""

from __future__ import annotations

from dataclasses import dataclass

from caretsup.markdown import Markdown
from caretsup.parser import iter_lines
from caretsup.scanner import Rejection, explain, has_closing_caret
from caretsup.tokens import CARET, Position

# Rejections that are ordinary prose or belong to another construct
_SILENT = frozenset({Rejection.TOO_SHORT, Rejection.UNTERMINATED, Rejection.DOUBLED})


@dataclass(frozen=True, slots=True)
class Finding:
    """A caret that did not open a superscript, with the reason."""

    rejection: Rejection
    position: Position

    @property
    def message(self) -> str:
        return self.rejection.value

    def format(self, filename: str = "input.md") -> str:
        return f"{filename}:{self.position.line}:{self.position.column}: {self.message}"


def lint(source: str, md: Markdown | None = None) -> list[Finding]:
    """Return one finding per unclaimed caret with an actionable rejection."""
    if md is None:
        from caretsup.extension import superscript

        md = Markdown([superscript()])

    misses: list[int] = []
    md.parse(source, misses)
    if not misses:
        return []

    line_ends = {start: stop for start, stop in iter_lines(source)}
    starts = sorted(line_ends)

    findings: list[Finding] = []
    line_idx = 0
    for offset in misses:
        if source[offset] != CARET:
            continue
        while line_idx + 1 < len(starts) and starts[line_idx + 1] <= offset:
            line_idx += 1
        line_start = starts[line_idx]
        stop = line_ends[line_start]
        # Leading whitespace is outside the inline range: a caret right after it starts the line
        before = source[offset - 1] if offset > line_start else None
        if before is not None and source[line_start:offset].isspace():
            before = None
        line = source[offset:stop].rstrip(" \t")

        rejection = explain(before, line)
        if rejection is None or rejection in _SILENT:
            continue
        if rejection is Rejection.AFTER_SPACE and not has_closing_caret(line):
            continue
        findings.append(
            Finding(rejection, Position(line_idx + 1, offset - line_start + 1, offset))
        )
    return findings
