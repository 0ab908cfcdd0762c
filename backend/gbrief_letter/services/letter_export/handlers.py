"""
Export Hooks

The hook surface the tree walk calls into. Each hook handles the g-brief
specific case and hands everything else to the context's backend.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional

from ...models.document import ExportBlock, ExportSnippet, Heading, Keyword
from .assembler import assemble_letter
from .collector import collect_heading
from .context import ExportContext

# Raw content addressed to this exporter passes through untouched
BLOCK_TYPE = "G-BRIEF"
SNIPPET_BACKEND = "g-brief"
KEYWORD_KEY = "G-BRIEF"


def export_block(block: ExportBlock, context: ExportContext) -> str:
    """#+BEGIN_EXPORT g-brief blocks are inserted verbatim."""
    if block.block_type == BLOCK_TYPE:
        return block.value if block.value.endswith("\n") else block.value + "\n"
    return context.backend.render_export_block(block)


def export_snippet(snippet: ExportSnippet, context: ExportContext) -> str:
    """@@g-brief:...@@ snippets are inserted verbatim."""
    if snippet.backend == SNIPPET_BACKEND:
        return snippet.value
    return context.backend.render_export_snippet(snippet)


def keyword(kw: Keyword, context: ExportContext) -> str:
    """#+G-BRIEF: lines are inserted verbatim."""
    if kw.key == KEYWORD_KEY:
        return kw.value + "\n"
    return context.backend.render_keyword(kw)


def heading(h: Heading, contents: str, context: ExportContext) -> str:
    return collect_heading(h, contents, context)


def template(contents: str, context: ExportContext, now: Optional[datetime] = None) -> str:
    return assemble_letter(context, contents, now=now)
