"""
Export Hook and Backend Tests

Verifies:
1. g-brief blocks, snippets and keywords pass through verbatim
2. Everything else falls through to the backend
3. LaTeX escaping and the %-substitution used by the metadata block
4. Preamble built from class, class options, packages and LATEX_HEADER
5. A custom backend can replace the generic rendering
"""

import pytest

from gbrief_letter.config import LetterConfig
from gbrief_letter.models import (
    Document,
    ExportBlock,
    ExportSnippet,
    Keyword,
    Paragraph,
)
from gbrief_letter.services.letter_export import (
    ExportContext,
    LatexBackend,
    LetterExporter,
    format_spec,
    handlers,
)


@pytest.fixture
def config():
    return LetterConfig(author=None, with_timestamp=False)


@pytest.fixture
def context(config):
    return ExportContext.create(Document(), config)


def body_of(content):
    start = content.index("\\begin{g-brief}\n") + len("\\begin{g-brief}\n")
    return content[start:content.index("\\end{g-brief}")]


# =============================================================================
# HOOKS
# =============================================================================

class TestExportHooks:

    def test_gbrief_block_verbatim(self, context):
        block = ExportBlock("g-brief", "\\vspace{1cm}")

        assert handlers.export_block(block, context) == "\\vspace{1cm}\n"

    def test_latex_block_falls_through(self, context):
        assert handlers.export_block(ExportBlock("latex", "\\relax\n"), context) == "\\relax\n"

    def test_foreign_block_dropped(self, context):
        assert handlers.export_block(ExportBlock("html", "<b>x</b>"), context) == ""

    def test_snippets(self, context):
        assert handlers.export_snippet(ExportSnippet("g-brief", "\\textbf{x}"), context) == "\\textbf{x}"
        assert handlers.export_snippet(ExportSnippet("latex", "\\emph{y}"), context) == "\\emph{y}"
        assert handlers.export_snippet(ExportSnippet("html", "<i>"), context) == ""

    def test_keywords(self, context):
        assert handlers.keyword(Keyword("G-BRIEF", "\\setkomavar{x}"), context) == "\\setkomavar{x}\n"
        assert handlers.keyword(Keyword("LATEX", "\\relax"), context) == "\\relax\n"
        assert handlers.keyword(Keyword("SUBJECT", "Hello"), context) == ""

    def test_raw_content_lands_in_body(self, config):
        document = Document(elements=[
            Paragraph(["Hello ", ExportSnippet("g-brief", "\\textbf{x}"), " & more"]),
            ExportBlock("G-BRIEF", "\\vspace{1cm}"),
            Keyword("G-BRIEF", "\\pagebreak"),
        ])

        body = body_of(LetterExporter(config).export(document).content)

        assert body == "Hello \\textbf{x} \\& more\n\n\\vspace{1cm}\n\n\\pagebreak\n"


# =============================================================================
# LATEX BACKEND
# =============================================================================

class TestLatexBackend:

    def test_escaping(self):
        backend = LatexBackend()

        assert backend.render_text("50% of $5 & #1_a{b}~^\\") == (
            "50\\% of \\$5 \\& \\#1\\_a\\{b\\}"
            "\\textasciitilde{}\\textasciicircum{}\\textbackslash{}"
        )

    def test_format_spec(self):
        assert format_spec("%a-%t-%%-%z", {"a": "A", "t": "T"}) == "A-T-%-"

    def test_preamble_uses_class_settings_and_header(self, config):
        document = Document(elements=[
            Keyword("LATEX_CLASS_OPTIONS", "[a4paper]"),
            Keyword("LATEX_HEADER", "\\usepackage{ngerman}"),
            Keyword("LATEX_HEADER", "\\usepackage{eurosym}"),
        ])

        content = LetterExporter(config).export(document).content

        assert content.startswith(
            "\\documentclass[a4paper]{g-brief}\n"
            "\\usepackage[utf8]{inputenc}\n"
            "\\usepackage[T1]{fontenc}\n"
            "\\usepackage{hyperref}\n"
            "\\usepackage{ngerman}\n"
            "\\usepackage{eurosym}\n"
        )

    def test_metadata_keywords(self, config):
        document = Document(elements=[
            Keyword("KEYWORDS", "invoice reminder"),
            Keyword("DESCRIPTION", "Second reminder"),
            Keyword("LANGUAGE", "de"),
        ])

        content = LetterExporter(config).export(document).content

        assert " pdfkeywords={invoice reminder},\n" in content
        assert " pdfsubject={Second reminder},\n" in content
        assert " pdflang={de}}\n" in content


class TestCustomBackend:

    def test_backend_without_metadata(self, config):
        class PlainBackend(LatexBackend):
            name = "plain"

            def metadata_block(self, values):
                return ""

        content = LetterExporter(config, backend=PlainBackend()).export(Document()).content

        assert "\\hypersetup" not in content
        assert "\\begin{g-brief}" in content

    def test_backend_text_rendering_is_used(self, config):
        class UpperBackend(LatexBackend):
            def render_text(self, text):
                return text.upper()

        document = Document(elements=[Paragraph(["quiet words"])])

        body = body_of(LetterExporter(config, backend=UpperBackend()).export(document).content)

        assert body == "QUIET WORDS\n"
