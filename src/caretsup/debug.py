"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from caretsup.ast import Node, Text
from caretsup.render import escape_attr


def dump_ast(node: Node, source: str, *, file: TextIO | None = None) -> None:
    """Print a human-readable AST tree to *file* (default: stderr)."""
    _dump_node(node, source, 0, file if file is not None else sys.stderr)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Node, source: str, depth: int, f: TextIO) -> None:
    if isinstance(node, Text):
        f.write(f"{_indent(depth)}Text({node.segment.value(source)!r})\n")
        return

    line = f"{_indent(depth)}{node.kind}"
    attributes = getattr(node, "attributes", None)
    if attributes:
        attrs = " ".join(f'{name}="{escape_attr(value)}"' for name, value in attributes)
        line += f" [{attrs}]"
    f.write(line + "\n")
    for child in node.children:
        _dump_node(child, source, depth + 1, f)
