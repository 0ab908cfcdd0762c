"""
Letter Exporter

Single pass over a parsed document:
1. Build the settings snapshot and an empty tagged-content store
2. Walk the tree, children before their heading hook
3. Assemble the g-brief document from body, settings and store

The context lives for one export() call only.
"""
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from ...config import LetterConfig, get_config
from ...models.document import Document, Element, ExportBlock, Heading, Keyword, Paragraph
from ...models.letter import ExportResult, LetterField
from . import handlers
from .backend import ExportBackend
from .context import ExportContext
from .resolver import resolve

logger = logging.getLogger(__name__)


class LetterExporter:
    """Exports parsed documents to g-brief LaTeX."""

    def __init__(self, config: Optional[LetterConfig] = None, backend: Optional[ExportBackend] = None):
        self.config = config or get_config()
        self.backend = backend

    def export(
        self,
        document: Document,
        overrides: Optional[Mapping[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> ExportResult:
        """
        Export one document.

        Args:
            document: parsed document tree
            overrides: option name -> value, treated as document overrides
            now: creation time (defaults to the current time)

        Returns:
            ExportResult with the LaTeX source and the tags that were collected
        """
        now = now or datetime.now(timezone.utc)
        context = ExportContext.create(document, self.config, self.backend, overrides)
        logger.info(
            f"Exporting letter: {len(document.elements)} top-level elements, "
            f"overrides={sorted(context.settings.overrides)}"
        )

        body = self.render_elements(document.elements, context)
        content = handlers.template(body, context, now=now)

        result = ExportResult(
            content=content,
            collected_tags=context.store.tags(),
            settings=self._settings_snapshot(context),
            generated_at=now,
        )
        logger.info(
            f"Exported letter: {len(content)} chars, collected tags={result.collected_tags}"
        )
        return result

    # -------------------------------------------------------------------------
    # Tree walk
    # -------------------------------------------------------------------------

    def render_elements(self, elements: List[Element], context: ExportContext) -> str:
        rendered = [self.render_element(e, context) for e in elements]
        return "\n".join(r for r in rendered if r)

    def render_element(self, element: Element, context: ExportContext) -> str:
        if isinstance(element, Heading):
            contents = self.render_elements(element.children, context)
            return handlers.heading(element, contents, context)
        if isinstance(element, Paragraph):
            return self._render_paragraph(element, context)
        if isinstance(element, ExportBlock):
            return handlers.export_block(element, context)
        if isinstance(element, Keyword):
            return handlers.keyword(element, context)
        raise TypeError(f"Unsupported document element: {type(element).__name__}")

    def _render_paragraph(self, paragraph: Paragraph, context: ExportContext) -> str:
        out = []
        for part in paragraph.parts:
            if isinstance(part, str):
                out.append(context.backend.render_text(part))
            else:
                out.append(handlers.export_snippet(part, context))
        text = "".join(out).strip()
        return text + "\n" if text else ""

    def _settings_snapshot(self, context: ExportContext) -> dict:
        """Effective settings with the author resolved to a string."""
        snapshot = context.settings.as_dict()
        snapshot["author"] = resolve(LetterField.AUTHOR, context)
        return snapshot


def export_letter(
    document: Document,
    config: Optional[LetterConfig] = None,
    backend: Optional[ExportBackend] = None,
    now: Optional[datetime] = None,
    **overrides: Any,
) -> ExportResult:
    """
    Convenience function: export a document with optional option overrides.

    Example:
        result = export_letter(doc, use_foldmarks=False)
    """
    return LetterExporter(config, backend).export(document, overrides=overrides or None, now=now)
