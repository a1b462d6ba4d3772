"""Post-parse passes that derive a new tree from a parsed one."""

from __future__ import annotations

from dataclasses import fields, replace

from caretsup.ast import Attributes, Document, Node, NodeKind


def merge_attributes(existing: Attributes | None, added: Attributes) -> Attributes:
    """Combine attribute lists; later values win, first-seen order is kept."""
    merged: dict[str, str] = dict(existing or ())
    merged.update(added)
    return tuple(merged.items())


def attach_attributes(doc: Document, kind: NodeKind, attributes: Attributes) -> Document:
    """Return a copy of *doc* where every node of *kind* carries *attributes*.

    Nodes of other kinds are shared with the input tree when nothing below
    them changed.
    """
    if not attributes:
        return doc

    def rebuild(node: Node) -> Node:
        names = {f.name for f in fields(node)}  # type: ignore[arg-type]
        if "children" not in names:
            return node
        children = tuple(rebuild(c) for c in node.children)
        changes: dict[str, object] = {}
        if children != node.children:
            changes["children"] = children
        if node.kind is kind and "attributes" in names:
            changes["attributes"] = merge_attributes(getattr(node, "attributes"), attributes)
        if not changes:
            return node
        return replace(node, **changes)  # type: ignore[type-var]

    result = rebuild(doc)
    assert isinstance(result, Document)
    return result
