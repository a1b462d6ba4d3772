"""AST node types, node kinds, and depth-first traversal."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import ClassVar, Protocol

from caretsup.errors import RegistrationError
from caretsup.tokens import Segment


@dataclass(frozen=True, slots=True)
class NodeKind:
    """Tag distinguishing one node variant from every other in the process."""

    name: str
    id: int

    def __str__(self) -> str:
        return self.name


_kind_ids = itertools.count(1)
_kinds: dict[str, NodeKind] = {}


def new_node_kind(name: str) -> NodeKind:
    """Allocate a new, process-wide unique node kind."""
    if name in _kinds:
        raise RegistrationError(f"node kind '{name}' is already defined")
    kind = NodeKind(name, next(_kind_ids))
    _kinds[name] = kind
    return kind


KIND_DOCUMENT = new_node_kind("Document")
KIND_PARAGRAPH = new_node_kind("Paragraph")
KIND_TEXT = new_node_kind("Text")
KIND_SUPERSCRIPT = new_node_kind("Superscript")

Attributes = tuple[tuple[str, str], ...]


class Node(Protocol):
    kind: ClassVar[NodeKind]

    @property
    def children(self) -> tuple[Node, ...]: ...


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text, as a segment of the source buffer."""

    kind: ClassVar[NodeKind] = KIND_TEXT

    segment: Segment

    @property
    def children(self) -> tuple[Node, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class Superscript:
    """A recognized ^...^ span. Content is a single literal Text child."""

    kind: ClassVar[NodeKind] = KIND_SUPERSCRIPT

    children: tuple[Node, ...]
    attributes: Attributes | None = None

    def with_attributes(self, attributes: Attributes) -> Superscript:
        return replace(self, attributes=attributes)


@dataclass(frozen=True, slots=True)
class Paragraph:
    """A run of non-blank lines."""

    kind: ClassVar[NodeKind] = KIND_PARAGRAPH

    children: tuple[Node, ...]
    segment: Segment


@dataclass(frozen=True, slots=True)
class Document:
    """Root document node."""

    kind: ClassVar[NodeKind] = KIND_DOCUMENT

    children: tuple[Paragraph, ...]


class WalkStatus(Enum):
    CONTINUE = auto()  # descend into children
    SKIP_CHILDREN = auto()
    STOP = auto()


Walker = Callable[[Node, bool], WalkStatus]


def walk(node: Node, walker: Walker) -> WalkStatus:
    """Depth-first traversal calling walker(node, entering) on entry and exit.

    Exit is not reported for a node whose entry returned STOP.
    """
    status = walker(node, True)
    if status is WalkStatus.STOP:
        return status
    if status is not WalkStatus.SKIP_CHILDREN:
        for child in node.children:
            if walk(child, walker) is WalkStatus.STOP:
                return WalkStatus.STOP
    return walker(node, False)
