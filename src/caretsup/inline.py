"""Inline driver — runs registered inline rules over a single line of text."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from caretsup.ast import Node, Text
from caretsup.errors import RegistrationError
from caretsup.tokens import Segment

if TYPE_CHECKING:
    from caretsup.scanner import ScanResult


class InlineRule(Protocol):
    """A scanner invoked at each occurrence of one of its trigger characters."""

    name: str
    triggers: tuple[str, ...]

    def parse(self, before: str | None, line: str, offset: int) -> ScanResult | None: ...


@dataclass(frozen=True, slots=True)
class _Registered:
    rule: InlineRule
    priority: int
    order: int


class InlineParser:
    """Priority-ordered inline rules keyed by trigger character.

    Rules sharing a trigger are tried from the highest priority down; equal
    priorities keep registration order. The first rule that matches wins.
    """

    def __init__(self) -> None:
        self._by_trigger: dict[str, list[_Registered]] = {}
        self._names: set[str] = set()
        self._order = itertools.count()

    def add_rule(self, rule: InlineRule, priority: int) -> None:
        if rule.name in self._names:
            raise RegistrationError(f"inline rule '{rule.name}' is already registered")
        self._names.add(rule.name)
        entry = _Registered(rule, priority, next(self._order))
        for trigger in rule.triggers:
            entries = self._by_trigger.setdefault(trigger, [])
            entries.append(entry)
            entries.sort(key=lambda e: (-e.priority, e.order))

    def rules_for(self, trigger: str) -> tuple[InlineRule, ...]:
        return tuple(e.rule for e in self._by_trigger.get(trigger, ()))

    @property
    def triggers(self) -> frozenset[str]:
        return frozenset(self._by_trigger)

    def parse_line(
        self,
        source: str,
        start: int,
        stop: int,
        misses: list[int] | None = None,
    ) -> list[Node]:
        """Parse source[start:stop] (one line) into inline nodes.

        Literal runs become Text segments. Offsets of trigger characters no
        rule claimed are appended to *misses* when given.
        """
        nodes: list[Node] = []
        text_start = start
        pos = start

        while pos < stop:
            entries = self._by_trigger.get(source[pos])
            if entries:
                before = source[pos - 1] if pos > start else None
                line = source[pos:stop]
                for entry in entries:
                    result = entry.rule.parse(before, line, pos)
                    if result is not None:
                        break
                else:
                    result = None

                if result is not None:
                    if text_start < pos:
                        nodes.append(Text(Segment(text_start, pos)))
                    nodes.append(result.node)
                    pos += result.consumed
                    text_start = pos
                    continue
                if misses is not None:
                    misses.append(pos)
            pos += 1

        if text_start < stop:
            nodes.append(Text(Segment(text_start, stop)))
        return nodes
