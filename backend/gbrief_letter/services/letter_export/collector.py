"""
Tagged-Content Collector

Routes special headings out of the letter body. A top-level heading carrying
a recognized tag has its rendered contents stored under that tag and
contributes nothing to the body. Every other heading contributes its contents
without its title.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from ...models.document import Heading
from ...models.letter import IN_LETTER_TAGS, LetterSettings
from .context import ExportContext

logger = logging.getLogger(__name__)


def recognized_tags(settings: LetterSettings) -> List[str]:
    """
    Every tag routed to a template slot, in enumeration order:
    in-letter tags, then after-closing order, then after-letter order.
    """
    ordered: List[str] = []
    for group in (
        IN_LETTER_TAGS,
        settings.get("after_closing_order") or [],
        settings.get("after_letter_order") or [],
    ):
        for tag in group:
            if tag not in ordered:
                ordered.append(tag)
    return ordered


def special_tag(heading: Heading, settings: LetterSettings) -> Optional[str]:
    """
    First recognized tag carried by a top-level heading, or None.

    Ties between several recognized tags go to the earliest in enumeration
    order, not in the heading's own tag order.
    """
    if heading.level != 1:
        return None
    for tag in recognized_tags(settings):
        if heading.has_tag(tag):
            return tag
    return None


class TaggedContentCollector:
    """Heading hook that fills the context's tagged-content store."""

    def collect(self, heading: Heading, contents: str, context: ExportContext) -> str:
        """
        Args:
            heading: the heading being exported
            contents: already rendered children of the heading
            context: current export context

        Returns:
            What the heading contributes to the body
        """
        tag = special_tag(heading, context.settings)
        if tag is None:
            return contents
        stored = context.store.record(tag, contents)
        logger.debug(f"Heading '{heading.title}' routed to tag '{tag}' (stored={stored})")
        return ""


_collector: Optional[TaggedContentCollector] = None


def get_collector() -> TaggedContentCollector:
    """Get or create the default collector singleton (stateless)."""
    global _collector
    if _collector is None:
        _collector = TaggedContentCollector()
    return _collector


def collect_heading(heading: Heading, contents: str, context: ExportContext) -> str:
    """Convenience function using the default collector."""
    return get_collector().collect(heading, contents, context)
