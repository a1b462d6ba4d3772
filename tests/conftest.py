"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from caretsup.ast import Node, Superscript, Text
from caretsup.extension import superscript
from caretsup.markdown import Markdown


@pytest.fixture
def md() -> Markdown:
    """Return a pipeline with the superscript extension installed."""
    return Markdown([superscript()])


@pytest.fixture
def convert(md: Markdown):
    """Return a helper that renders source to an HTML fragment."""

    def _convert(source: str) -> str:
        return md.convert(source)

    return _convert


def text_of(node: Node, source: str) -> str:
    """Concatenate the literal text below a node."""
    if isinstance(node, Text):
        return node.segment.value(source)
    return "".join(text_of(c, source) for c in node.children)


def superscripts(nodes: list[Node] | tuple[Node, ...]) -> list[Superscript]:
    """Return the Superscript nodes in an inline node list."""
    return [n for n in nodes if isinstance(n, Superscript)]


def assert_kinds(nodes: list[Node] | tuple[Node, ...], expected: list[str]) -> None:
    """Assert that node kind names match the expected list."""
    actual = [n.kind.name for n in nodes]
    assert actual == expected, f"Expected {expected}, got {actual}"
