"""Extension wiring — installs inline rules and render functions on a pipeline."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING, Protocol

from caretsup.ast import KIND_SUPERSCRIPT
from caretsup.errors import ConfigError
from caretsup.render import render_superscript
from caretsup.scanner import SuperscriptRule

if TYPE_CHECKING:
    from caretsup.markdown import Markdown

# Doubled-caret constructs must register above this so they are tried first.
SUPERSCRIPT_PRIORITY = 100


class Extension(Protocol):
    name: str

    def extend(self, md: Markdown) -> None: ...


@dataclass(frozen=True, slots=True)
class SuperscriptExtension:
    """Adds ^text^ superscripts to a Markdown pipeline."""

    name: str = "superscript"
    priority: int = SUPERSCRIPT_PRIORITY

    def extend(self, md: Markdown) -> None:
        md.inline.add_rule(SuperscriptRule(), self.priority)
        md.renderer.register(KIND_SUPERSCRIPT, render_superscript)


@cache
def superscript() -> SuperscriptExtension:
    """Return the shared, pre-configured superscript extension."""
    return SuperscriptExtension()


def _builtin_extensions() -> dict[str, Extension]:
    return {"superscript": superscript()}


def resolve_extensions(names: Iterable[str]) -> tuple[Extension, ...]:
    """Map extension names (from config or CLI) to extension instances."""
    builtin = _builtin_extensions()
    result: list[Extension] = []
    for name in names:
        ext = builtin.get(name)
        if ext is None:
            known = ", ".join(sorted(builtin))
            raise ConfigError(f"unknown extension '{name}' (known: {known})")
        if ext not in result:
            result.append(ext)
    return tuple(result)
