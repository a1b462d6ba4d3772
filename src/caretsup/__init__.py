"""caretsup — ^superscript^ spans for a small Markdown-style pipeline."""

from __future__ import annotations

__version__ = "0.1.0"


def convert(source: str, superscript: bool = True) -> str:
    """Parse and render source to an HTML fragment."""
    from caretsup.extension import superscript as superscript_extension
    from caretsup.markdown import Markdown

    extensions = [superscript_extension()] if superscript else []
    return Markdown(extensions).convert(source)
