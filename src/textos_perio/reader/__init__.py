"""
Reader Module - Rendering of generated documents for the reader view.
=====================================================================

- highlight: Keyword highlighting (longest match first, case-insensitive)
- render: Markdown-lite line rendering to blocks, HTML and Rich text
"""

from textos_perio.reader.highlight import build_keyword_pattern, highlight_keywords
from textos_perio.reader.render import (
    blocks_to_html,
    blocks_to_rich,
    render_document,
    render_line,
    render_paragraph,
)

__all__ = [
    # Highlight
    "build_keyword_pattern",
    "highlight_keywords",
    # Render
    "blocks_to_html",
    "blocks_to_rich",
    "render_document",
    "render_line",
    "render_paragraph",
]
