"""Markdown pipeline — block parser, inline rules, and HTML renderer."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from caretsup.ast import Document
from caretsup.inline import InlineParser
from caretsup.parser import parse
from caretsup.render import HTMLRenderer

if TYPE_CHECKING:
    from caretsup.extension import Extension


class Markdown:
    """A configured parse + render pipeline.

    Extensions register their rules and render functions once, at
    construction; afterwards the pipeline is only read, so one instance can
    convert many documents.
    """

    def __init__(self, extensions: Iterable[Extension] = ()) -> None:
        self.inline = InlineParser()
        self.renderer = HTMLRenderer()
        self.extensions: tuple[Extension, ...] = tuple(extensions)
        for ext in self.extensions:
            ext.extend(self)

    def parse(self, source: str, misses: list[int] | None = None) -> Document:
        return parse(source, self.inline, misses)

    def render(self, doc: Document, source: str) -> str:
        return self.renderer.render_to_string(source, doc)

    def convert(self, source: str) -> str:
        """Parse and render source to an HTML fragment."""
        return self.render(self.parse(source), source)
