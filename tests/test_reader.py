"""
Tests for Reader Module.
========================

Tests for:
- Highlight: Keyword pattern building and span splitting
- Render: Markdown-lite blocks, HTML and Rich output
"""

import re

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Highlight Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestHighlight:
    """Tests for keyword highlighting."""

    def test_pattern_longest_first(self):
        """Test that longer keywords come first in the alternation."""
        from textos_perio.reader.highlight import build_keyword_pattern

        pattern = build_keyword_pattern(["medio", "medios masivos"])

        assert pattern.pattern == "(" + re.escape("medios masivos") + "|medio)"
        assert pattern.findall("Los medios masivos y el medio") == ["medios masivos", "medio"]

    def test_pattern_ignores_blank_keywords(self):
        """Test that blank keywords produce no pattern."""
        from textos_perio.reader.highlight import build_keyword_pattern

        assert build_keyword_pattern(["", "   "]) is None
        assert build_keyword_pattern([]) is None

    def test_highlight_marks_keywords(self):
        """Test that keywords become keyword spans."""
        from textos_perio.reader.highlight import highlight_keywords
        from textos_perio.shared.schemas import SpanKind

        spans = highlight_keywords("La semiosis es social.", ["semiosis"])

        assert [(s.text, s.kind) for s in spans] == [
            ("La ", SpanKind.PLAIN),
            ("semiosis", SpanKind.KEYWORD),
            (" es social.", SpanKind.PLAIN),
        ]

    def test_highlight_is_case_insensitive_and_preserves_case(self):
        """Test that matching ignores case but keeps the original text."""
        from textos_perio.reader.highlight import highlight_keywords
        from textos_perio.shared.schemas import SpanKind

        spans = highlight_keywords("Semiosis y SEMIOSIS", ["semiosis"])
        keywords = [s.text for s in spans if s.kind == SpanKind.KEYWORD]

        assert keywords == ["Semiosis", "SEMIOSIS"]

    def test_highlight_longest_match_wins(self):
        """Test that an overlapping longer keyword is matched whole."""
        from textos_perio.reader.highlight import highlight_keywords
        from textos_perio.shared.schemas import SpanKind

        spans = highlight_keywords(
            "El análisis del discurso y el análisis.",
            ["análisis", "análisis del discurso"],
        )
        keywords = [s.text for s in spans if s.kind == SpanKind.KEYWORD]

        assert keywords == ["análisis del discurso", "análisis"]

    def test_highlight_escapes_metacharacters(self):
        """Test that regex metacharacters in keywords are literal."""
        from textos_perio.reader.highlight import highlight_keywords
        from textos_perio.shared.schemas import SpanKind

        spans = highlight_keywords("Usa C++ (1987) y C.", ["C++ (1987)"])
        keywords = [s.text for s in spans if s.kind == SpanKind.KEYWORD]

        assert keywords == ["C++ (1987)"]

    @pytest.mark.parametrize("keywords", [[], ["inexistente"], ["", " "]])
    def test_highlight_without_matches(self, keywords):
        """Test that text without matches is a single plain span."""
        from textos_perio.reader.highlight import highlight_keywords
        from textos_perio.shared.schemas import SpanKind

        spans = highlight_keywords("Texto sin coincidencias.", keywords)

        assert len(spans) == 1
        assert spans[0].kind == SpanKind.PLAIN
        assert spans[0].text == "Texto sin coincidencias."

    def test_highlight_empty_text(self):
        """Test that empty text gives no spans."""
        from textos_perio.reader.highlight import highlight_keywords

        assert highlight_keywords("", ["semiosis"]) == []

    def test_spans_rebuild_original_text(self):
        """Test that joining the spans gives back the input."""
        from textos_perio.reader.highlight import highlight_keywords

        text = "Discurso, discursividad y el DISCURSO social."
        spans = highlight_keywords(text, ["discurso", "social"])

        assert "".join(s.text for s in spans) == text


# ─────────────────────────────────────────────────────────────────────────────
# Render Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestRender:
    """Tests for document rendering."""

    def test_render_document_blocks(self, sample_document_text):
        """Test the block kinds of a sample document."""
        from textos_perio.reader.render import render_document
        from textos_perio.shared.schemas import BlockKind

        blocks = render_document(sample_document_text, ["semiosis"])

        assert [b.kind for b in blocks] == [
            BlockKind.HEADING,
            BlockKind.SPACER,
            BlockKind.PARAGRAPH,
            BlockKind.HEADING,
            BlockKind.PARAGRAPH,
            BlockKind.SPACER,
        ]
        assert blocks[0].level == 2
        assert blocks[0].text == "Capítulo 1: La red semiótica"
        assert blocks[3].level == 3

    def test_heading_text_is_not_styled(self, sample_document_text):
        """Test that headings keep bold markers and skip highlighting."""
        from textos_perio.reader.render import render_document
        from textos_perio.shared.schemas import SpanKind

        heading = render_document(sample_document_text, ["semiosis"])[3]

        assert heading.text == "El concepto de **semiosis**"
        assert all(s.kind == SpanKind.PLAIN for s in heading.spans)

    @pytest.mark.parametrize("line", ["#### Cuarto nivel", "##Sin espacio", "# Título"])
    def test_other_markers_are_paragraphs(self, line):
        """Test that only '## ' and '### ' make headings."""
        from textos_perio.reader.render import render_line
        from textos_perio.shared.schemas import BlockKind

        block = render_line(line, [])

        assert block.kind == BlockKind.PARAGRAPH
        assert block.text == line

    def test_whitespace_only_line_is_spacer(self):
        """Test that a whitespace-only line becomes a spacer."""
        from textos_perio.reader.render import render_line
        from textos_perio.shared.schemas import BlockKind

        assert render_line("   \t", []).kind == BlockKind.SPACER

    def test_bold_runs_are_not_highlighted(self):
        """Test that keywords inside bold runs stay bold."""
        from textos_perio.reader.render import render_paragraph
        from textos_perio.shared.schemas import SpanKind

        spans = render_paragraph("La **semiosis** y la semiosis", ["semiosis"])

        assert [(s.text, s.kind) for s in spans] == [
            ("La ", SpanKind.PLAIN),
            ("semiosis", SpanKind.BOLD),
            (" y la ", SpanKind.PLAIN),
            ("semiosis", SpanKind.KEYWORD),
        ]

    def test_unclosed_bold_is_plain(self):
        """Test that an unmatched marker is kept as text."""
        from textos_perio.reader.render import render_paragraph
        from textos_perio.shared.schemas import SpanKind

        spans = render_paragraph("Texto **sin cierre", [])

        assert len(spans) == 1
        assert spans[0].kind == SpanKind.PLAIN
        assert spans[0].text == "Texto **sin cierre"

    def test_render_empty_document(self):
        """Test that an empty document has no blocks."""
        from textos_perio.reader.render import render_document

        assert render_document("") == []

    def test_blocks_to_html(self, sample_document_text):
        """Test the HTML output of a sample document."""
        from textos_perio.reader.render import blocks_to_html, render_document

        output = blocks_to_html(render_document(sample_document_text, ["discurso"]))

        assert '<h2 class="doc-heading">Capítulo 1: La red semiótica</h2>' in output
        assert '<div class="doc-spacer"></div>' in output
        assert "<strong>semiosis</strong>" in output
        assert '<mark class="keyword">discurso</mark>' in output

    def test_blocks_to_html_escapes_text(self):
        """Test that model output cannot inject markup."""
        from textos_perio.reader.render import blocks_to_html, render_document

        output = blocks_to_html(render_document("<script>alert(1)</script>\n## <b>x</b>"))

        assert "<script>" not in output
        assert "&lt;script&gt;" in output
        assert "&lt;b&gt;x&lt;/b&gt;" in output

    def test_blocks_to_rich(self, sample_document_text):
        """Test that Rich output has one renderable per block."""
        from rich.console import Group

        from textos_perio.reader.render import blocks_to_rich, render_document

        blocks = render_document(sample_document_text, ["semiosis"])
        group = blocks_to_rich(blocks)

        assert isinstance(group, Group)
        assert len(group.renderables) == len(blocks)
        assert group.renderables[0].plain == "Capítulo 1: La red semiótica"
