"""
Highlight Module - Keyword highlighting for the reader view.
============================================================

Splits a piece of text into plain and keyword spans. Keywords are matched
case-insensitively and longest first, so "análisis del discurso" wins over
"análisis" when both are keywords.
"""

import re
from typing import Iterable, Optional

from textos_perio.shared.schemas import SpanKind, TextSpan


def build_keyword_pattern(keywords: Iterable[str]) -> Optional[re.Pattern]:
    """
    Build one capturing alternation for a set of keywords.

    Blank keywords are ignored. Returns None when nothing is left.

    Example:
        >>> build_keyword_pattern(["medio", "medios masivos"]).pattern
        '(medios\\\\ masivos|medio)'
    """
    cleaned = {k.strip() for k in keywords if k and k.strip()}
    if not cleaned:
        return None

    ordered = sorted(cleaned, key=lambda k: (-len(k), k))
    return re.compile("(" + "|".join(re.escape(k) for k in ordered) + ")", re.IGNORECASE)


def highlight_keywords(text: str, keywords: Iterable[str]) -> list[TextSpan]:
    """
    Split text into plain and keyword spans.

    Args:
        text: Text to scan
        keywords: Keywords to highlight

    Returns:
        Spans in text order; concatenating them gives back the original text
    """
    if not text:
        return []

    keywords = list(keywords or [])
    pattern = build_keyword_pattern(keywords)
    if pattern is None:
        return [TextSpan(text=text)]

    lowered = {k.strip().lower() for k in keywords if k and k.strip()}

    spans = []
    for part in pattern.split(text):
        if not part:
            continue
        kind = SpanKind.KEYWORD if part.lower() in lowered else SpanKind.PLAIN
        spans.append(TextSpan(text=part, kind=kind))
    return spans
