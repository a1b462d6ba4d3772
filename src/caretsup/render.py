"""HTML renderer — walks the AST and dispatches on node kind."""

from __future__ import annotations

import html
import io
import re
from collections.abc import Callable
from html.entities import html5
from typing import TextIO

from caretsup.ast import (
    KIND_DOCUMENT,
    KIND_PARAGRAPH,
    KIND_TEXT,
    Attributes,
    Node,
    NodeKind,
    Text,
    WalkStatus,
    walk,
)
from caretsup.errors import RegistrationError

RenderFunc = Callable[[TextIO, str, Node, bool], WalkStatus]


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------

# Entity and numeric character references; a terminating semicolon is required
_CHAR_REF = re.compile(r"&(?:#[0-9]{1,7}|#[xX][0-9A-Fa-f]{1,6}|[A-Za-z][A-Za-z0-9]{1,31});")


def decode_char_refs(text: str) -> str:
    """Replace character references such as `&times;` or `&#x1F604;` with their characters.

    Unknown named references are left as written.
    """
    if "&" not in text:
        return text
    return _CHAR_REF.sub(_decode_ref, text)


def _decode_ref(match: re.Match[str]) -> str:
    ref = match.group(0)
    if ref[1] != "#" and ref[1:] not in html5:
        return ref
    return html.unescape(ref)


def escape_html(text: str) -> str:
    """Escape text for HTML body content. Also encodes non-ASCII as entities."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


def escape_attr(text: str) -> str:
    """Escape text for HTML attribute values."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------

GLOBAL_ATTRIBUTE_FILTER = frozenset(
    {
        "accesskey",
        "autocapitalize",
        "autofocus",
        "class",
        "contenteditable",
        "dir",
        "draggable",
        "enterkeyhint",
        "hidden",
        "id",
        "inert",
        "inputmode",
        "is",
        "itemid",
        "itemprop",
        "itemref",
        "itemscope",
        "itemtype",
        "lang",
        "part",
        "role",
        "slot",
        "spellcheck",
        "style",
        "tabindex",
        "title",
        "translate",
    }
)

# <sup> has no element-specific attributes
SUPERSCRIPT_ATTRIBUTE_FILTER = GLOBAL_ATTRIBUTE_FILTER

_ATTRIBUTE_NAME = re.compile(r"[A-Za-z_:][A-Za-z0-9_.:-]*\Z")


def allowed_attribute(name: str, allowed: frozenset[str]) -> bool:
    """Return True if an attribute name passes the filter.

    Names must be plain attribute identifiers. Beyond *allowed*, any `data-*`
    name passes, and so does any `aria-*` name: the ARIA prefix widens the
    usual global-attribute filter, which only admits `data-*`.
    """
    if _ATTRIBUTE_NAME.match(name) is None:
        return False
    lowered = name.lower()
    if lowered.startswith(("data-", "aria-")):
        return len(lowered) > 5
    return lowered in allowed


def render_attributes(out: TextIO, attributes: Attributes, allowed: frozenset[str]) -> None:
    """Write ' name="value"' for every attribute that passes the filter."""
    for name, value in attributes:
        if allowed_attribute(name, allowed):
            out.write(f' {name}="{escape_attr(value)}"')


# ---------------------------------------------------------------------------
# Node render functions
# ---------------------------------------------------------------------------


def render_document(out: TextIO, source: str, node: Node, entering: bool) -> WalkStatus:
    return WalkStatus.CONTINUE


def render_paragraph(out: TextIO, source: str, node: Node, entering: bool) -> WalkStatus:
    out.write("<p>" if entering else "</p>\n")
    return WalkStatus.CONTINUE


def render_text(out: TextIO, source: str, node: Node, entering: bool) -> WalkStatus:
    if entering and isinstance(node, Text):
        out.write(escape_html(decode_char_refs(node.segment.value(source))))
    return WalkStatus.CONTINUE


def render_superscript(out: TextIO, source: str, node: Node, entering: bool) -> WalkStatus:
    """Render a Superscript node as <sup>...</sup>; children render themselves."""
    if entering:
        attributes = getattr(node, "attributes", None)
        if attributes is not None:
            out.write("<sup")
            render_attributes(out, attributes, SUPERSCRIPT_ATTRIBUTE_FILTER)
            out.write(">")
        else:
            out.write("<sup>")
    else:
        out.write("</sup>")
    return WalkStatus.CONTINUE


def _render_unknown(out: TextIO, source: str, node: Node, entering: bool) -> WalkStatus:
    # Nodes with no registered function are transparent
    return WalkStatus.CONTINUE


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class HTMLRenderer:
    """Dispatch table from node kind to render function."""

    def __init__(self) -> None:
        self._funcs: dict[NodeKind, RenderFunc] = {
            KIND_DOCUMENT: render_document,
            KIND_PARAGRAPH: render_paragraph,
            KIND_TEXT: render_text,
        }

    def register(self, kind: NodeKind, func: RenderFunc, *, replace: bool = False) -> None:
        if kind in self._funcs and not replace:
            raise RegistrationError(f"a render function for '{kind}' is already registered")
        self._funcs[kind] = func

    def func_for(self, kind: NodeKind) -> RenderFunc | None:
        return self._funcs.get(kind)

    def render(self, out: TextIO, source: str, node: Node) -> None:
        """Render *node* and its subtree to *out*."""

        def visit(n: Node, entering: bool) -> WalkStatus:
            func = self._funcs.get(n.kind, _render_unknown)
            return func(out, source, n, entering)

        walk(node, visit)

    def render_to_string(self, source: str, node: Node) -> str:
        buf = io.StringIO()
        self.render(buf, source, node)
        return buf.getvalue()
