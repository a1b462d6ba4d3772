"""Standalone page wrapper — embeds a rendered fragment in a full HTML document."""

from __future__ import annotations

from dataclasses import dataclass, field

from caretsup.render import escape_attr, escape_html


@dataclass(frozen=True, slots=True)
class PageOptions:
    """Head content for a standalone page."""

    title: str | None = None
    lang: str | None = None
    css_files: list[str] = field(default_factory=list)
    meta_tags: list[tuple[str, str]] = field(default_factory=list)


def head_items(options: PageOptions) -> list[str]:
    """Synthesize <head> elements from page options.

    Returns an empty list if there is nothing to add beyond the charset.
    """
    items: list[str] = []
    if options.title:
        items.append(f"<title>{escape_html(options.title)}</title>")
    for path in options.css_files:
        items.append(f'<link rel="stylesheet" href="{escape_attr(path)}">')
    for name, content in options.meta_tags:
        items.append(f'<meta name="{escape_attr(name)}" content="{escape_attr(content)}">')
    return items


def render_page(fragment: str, options: PageOptions) -> str:
    """Wrap an HTML fragment in a complete HTML document."""
    parts: list[str] = ["<!DOCTYPE html>\n"]
    if options.lang:
        parts.append(f'<html lang="{escape_attr(options.lang)}">\n')
    else:
        parts.append("<html>\n")
    parts.append("<head>\n")
    parts.append('<meta charset="utf-8">\n')
    for item in head_items(options):
        parts.append(item)
        parts.append("\n")
    parts.append("</head>\n")
    parts.append("<body>\n")
    parts.append(fragment)
    parts.append("</body>\n")
    parts.append("</html>\n")
    return "".join(parts)
