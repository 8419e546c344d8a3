"""
Render Module - Markdown-lite rendering of generated documents.
===============================================================

The model returns long-form text with a handful of markdown conventions.
Each line becomes one block:
- blank line   → spacer
- "### title"  → level-3 heading
- "## title"   → level-2 heading
- anything else → paragraph, with **bold** runs and highlighted keywords

Blocks are turned into HTML for the web UI or into Rich text for the CLI.
"""

import html
import re
from typing import Iterable

from rich.console import Group
from rich.text import Text

from textos_perio.reader.highlight import highlight_keywords
from textos_perio.shared.schemas import Block, BlockKind, SpanKind, TextSpan

BOLD_PATTERN = re.compile(r"(\*\*.*?\*\*)")

HEADING_PREFIXES = (("### ", 3), ("## ", 2))


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────


def render_paragraph(line: str, keywords: Iterable[str]) -> list[TextSpan]:
    """Split one paragraph line into bold, keyword and plain spans."""
    keywords = list(keywords)
    spans: list[TextSpan] = []

    for part in BOLD_PATTERN.split(line):
        if not part:
            continue
        if len(part) >= 4 and part.startswith("**") and part.endswith("**"):
            spans.append(TextSpan(text=part[2:-2], kind=SpanKind.BOLD))
        else:
            spans.extend(highlight_keywords(part, keywords))

    return spans


def render_line(line: str, keywords: Iterable[str]) -> Block:
    """Render one line of generated text into a block."""
    trimmed = line.strip()
    if not trimmed:
        return Block(kind=BlockKind.SPACER)

    for prefix, level in HEADING_PREFIXES:
        if trimmed.startswith(prefix):
            title = trimmed[len(prefix):].strip()
            return Block(kind=BlockKind.HEADING, level=level, spans=[TextSpan(text=title)])

    return Block(kind=BlockKind.PARAGRAPH, spans=render_paragraph(trimmed, keywords))


def render_document(text: str, keywords: Iterable[str] = ()) -> list[Block]:
    """
    Render a generated document into blocks, one per line.

    Args:
        text: Raw document text from the model
        keywords: Keywords of the selected result, highlighted in paragraphs

    Returns:
        List of blocks in document order
    """
    if not text:
        return []

    keywords = list(keywords or [])
    return [render_line(line, keywords) for line in text.split("\n")]


# ─────────────────────────────────────────────────────────────────────────────
# Output Formats
# ─────────────────────────────────────────────────────────────────────────────


def _span_to_html(span: TextSpan) -> str:
    escaped = html.escape(span.text)
    if span.kind == SpanKind.BOLD:
        return f"<strong>{escaped}</strong>"
    if span.kind == SpanKind.KEYWORD:
        return f'<mark class="keyword">{escaped}</mark>'
    return escaped


def blocks_to_html(blocks: Iterable[Block]) -> str:
    """
    Convert blocks to HTML. All text is escaped.

    Example:
        >>> blocks_to_html(render_document("## Cap. 1"))
        '<h2 class="doc-heading">Cap. 1</h2>'
    """
    parts = []
    for block in blocks:
        if block.kind == BlockKind.SPACER:
            parts.append('<div class="doc-spacer"></div>')
        elif block.kind == BlockKind.HEADING:
            tag = f"h{block.level}"
            parts.append(f'<{tag} class="doc-heading">{html.escape(block.text)}</{tag}>')
        else:
            inner = "".join(_span_to_html(span) for span in block.spans)
            parts.append(f'<p class="doc-paragraph">{inner}</p>')
    return "\n".join(parts)


SPAN_STYLES = {
    SpanKind.PLAIN: "",
    SpanKind.BOLD: "bold",
    SpanKind.KEYWORD: "bold black on yellow",
}


def blocks_to_rich(blocks: Iterable[Block]) -> Group:
    """Convert blocks to a Rich renderable for terminal output."""
    renderables = []
    for block in blocks:
        if block.kind == BlockKind.SPACER:
            renderables.append(Text(""))
        elif block.kind == BlockKind.HEADING:
            style = "bold underline green" if block.level == 2 else "bold"
            renderables.append(Text(block.text, style=style))
        else:
            line = Text()
            for span in block.spans:
                line.append(span.text, style=SPAN_STYLES[span.kind])
            renderables.append(line)
    return Group(*renderables)
