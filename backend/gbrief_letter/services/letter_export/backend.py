"""
Export Backends

The letter exporter only handles what is specific to g-brief. Anything
generic (escaping text, raw LaTeX blocks, the preamble, the PDF metadata
block) is asked of an ExportBackend. LatexBackend is the default one.
"""
from __future__ import annotations
import re
from abc import ABC, abstractmethod
from typing import Mapping

from ...models.document import ExportBlock, ExportSnippet, Keyword
from ...models.letter import LetterSettings
from .templates import DEFAULT_PACKAGES, HYPERREF_TEMPLATE

_LATEX_SPECIALS = {
    "\\": "\\textbackslash{}",
    "&": "\\&",
    "%": "\\%",
    "$": "\\$",
    "#": "\\#",
    "_": "\\_",
    "{": "\\{",
    "}": "\\}",
    "~": "\\textasciitilde{}",
    "^": "\\textasciicircum{}",
}
_LATEX_SPECIALS_RE = re.compile(r"[\\&%$#_{}~^]")

_FORMAT_SPEC_RE = re.compile(r"%(.)")


def format_spec(template: str, values: Mapping[str, str]) -> str:
    """
    Replace %x placeholders with values[x].

    %% yields a literal percent sign; unknown placeholders become "".
    """
    def substitute(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key == "%":
            return "%"
        return values.get(key, "")

    return _FORMAT_SPEC_RE.sub(substitute, template)


class ExportBackend(ABC):
    """Generic rendering capabilities the letter exporter relies on."""

    name: str = "generic"

    @abstractmethod
    def render_text(self, text: str) -> str:
        """Convert plain text to target markup."""

    @abstractmethod
    def render_export_block(self, block: ExportBlock) -> str:
        """Render a raw block the letter exporter does not handle."""

    @abstractmethod
    def render_export_snippet(self, snippet: ExportSnippet) -> str:
        """Render an inline snippet the letter exporter does not handle."""

    @abstractmethod
    def render_keyword(self, keyword: Keyword) -> str:
        """Render a body keyword the letter exporter does not handle."""

    @abstractmethod
    def document_preamble(self, settings: LetterSettings) -> str:
        """Document class line plus preamble."""

    @abstractmethod
    def metadata_block(self, values: Mapping[str, str]) -> str:
        """Metadata block filled from a %-substitution map."""


class LatexBackend(ExportBackend):
    """Plain LaTeX rendering of generic content."""

    name = "latex"

    def __init__(self, hyperref_template: str = HYPERREF_TEMPLATE, packages=DEFAULT_PACKAGES):
        self.hyperref_template = hyperref_template
        self.packages = tuple(packages)

    def render_text(self, text: str) -> str:
        return _LATEX_SPECIALS_RE.sub(lambda m: _LATEX_SPECIALS[m.group(0)], text)

    def render_export_block(self, block: ExportBlock) -> str:
        if block.block_type == "LATEX":
            return block.value if block.value.endswith("\n") else block.value + "\n"
        return ""

    def render_export_snippet(self, snippet: ExportSnippet) -> str:
        return snippet.value if snippet.backend == "latex" else ""

    def render_keyword(self, keyword: Keyword) -> str:
        if keyword.key == "LATEX":
            return keyword.value + "\n"
        return ""

    def document_preamble(self, settings: LetterSettings) -> str:
        class_options = settings.get("latex_class_options") or ""
        lines = [f"\\documentclass{class_options}{{{settings.get('latex_class') or 'g-brief'}}}"]
        lines.extend(self.packages)
        header = settings.get("latex_header") or ""
        lines.extend(line for line in header.splitlines() if line.strip())
        return "\n".join(lines) + "\n"

    def metadata_block(self, values: Mapping[str, str]) -> str:
        if not self.hyperref_template:
            return ""
        return format_spec(self.hyperref_template, values)
