"""
Value Resolver

Decides, per semantic field, which source wins:

- explicit document keyword / option
- tagged heading content
- configured default
- empty string

The resolver never raises and never returns None. Whether an empty result
suppresses a template fragment is up to the assembler.
"""
from __future__ import annotations
from typing import Callable, Dict, Optional

from ...models.letter import EMPTY_TITLE_TAG, LetterField
from .collector import special_tag
from .context import ExportContext
from .templates import LINE_BREAK


def with_line_breaks(text: str) -> str:
    """Trim and turn every newline into an explicit LaTeX line break."""
    lines = [line.strip() for line in text.strip().splitlines()]
    # blank lines between paragraphs would become empty \\ rows
    return LINE_BREAK.join(line for line in lines if line)


class ValueResolver:
    """
    Resolve letter fields against an export context.

    Resolution only reads the context, so resolving the same field twice
    gives the same value.
    """

    def __init__(self):
        self._resolvers: Dict[LetterField, Callable[[ExportContext], str]] = {
            LetterField.TO: lambda ctx: self._address(ctx, "to_address", "to"),
            LetterField.FROM: lambda ctx: self._address(ctx, "from_address", "from"),
            LetterField.OPENING: self._opening,
            LetterField.CLOSING: self._closing,
            LetterField.SIGNATURE: self._signature,
            LetterField.AUTHOR: self._author,
            LetterField.SUBJECT: self._subject,
            LetterField.DATE: self._date,
        }

    def resolve(self, field: LetterField, context: ExportContext) -> str:
        """Effective string value of a field ("" when unresolved)."""
        value = self._resolvers[LetterField(field)](context)
        return value or ""

    # -------------------------------------------------------------------------
    # Field rules
    # -------------------------------------------------------------------------

    def _setting_text(self, context: ExportContext, option: str) -> str:
        """
        Option value as target markup.

        Document values are plain text and get escaped. Configured defaults
        are taken as markup, so "\\today" and the like survive.
        """
        value = context.settings.get(option) or ""
        if value and context.settings.is_overridden(option):
            return context.backend.render_text(value)
        return value

    def _address(self, context: ExportContext, option: str, tag: str) -> str:
        keyword_value = self._setting_text(context, option)
        heading_value = context.store.content(tag) or ""

        # a blank heading never hides a keyword
        if context.settings.get("prefer_special_headings"):
            raw = heading_value if heading_value.strip() else keyword_value
        else:
            raw = keyword_value if keyword_value.strip() else heading_value
        return with_line_breaks(raw)

    def _opening(self, context: ExportContext) -> str:
        explicit = self._setting_text(context, "opening")
        if explicit.strip():
            return explicit
        if not context.settings.get("headline_is_opening"):
            return ""

        for heading in context.document.top_level_headings():
            if special_tag(heading, context.settings) is not None:
                continue
            if heading.has_tag(EMPTY_TITLE_TAG):
                return ""
            return context.backend.render_text(heading.title)
        return ""

    def _closing(self, context: ExportContext) -> str:
        explicit = self._setting_text(context, "closing")
        if explicit.strip():
            return explicit
        if context.settings.get("headline_is_opening"):
            return (context.store.content("closing") or "").strip()
        return ""

    def _signature(self, context: ExportContext) -> str:
        # the closing heading only ever fills \Gruss
        return self._setting_text(context, "signature").strip()

    def _author(self, context: ExportContext) -> str:
        if context.settings.is_overridden("author"):
            name = context.settings.get("author") or ""
        else:
            source = context.settings.defaults.get("author")
            if callable(source):
                name = source() or ""
            else:
                name = str(source) if source else ""
        return context.backend.render_text(name)

    def _subject(self, context: ExportContext) -> str:
        subject = self._setting_text(context, "subject")
        if subject.strip():
            return subject
        return context.backend.render_text(context.document.keyword_value("TITLE"))

    def _date(self, context: ExportContext) -> str:
        return context.settings.get("date") or ""


_resolver: Optional[ValueResolver] = None


def get_resolver() -> ValueResolver:
    """Get or create the default resolver singleton (stateless)."""
    global _resolver
    if _resolver is None:
        _resolver = ValueResolver()
    return _resolver


def resolve(field: LetterField, context: ExportContext) -> str:
    """Convenience function using the default resolver."""
    return get_resolver().resolve(field, context)
