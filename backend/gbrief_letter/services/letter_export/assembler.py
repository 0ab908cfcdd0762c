"""
Document Template Assembler

Serializes the resolved fields, collected blocks and rendered body into the
final g-brief document.

Assembly order:
1. Creation timestamp comment (optional)
2. Preamble (backend)
3. Settings switches - configured defaults first, then document overrides
4. Footer columns (always six slots each)
5. Return address
6. Date
7. PDF metadata block (backend)
8. Subject
9. Opening
10. Closing + signature
11. Recipient address
12-13. \\begin{document} \\begin{g-brief}
14. Body
15. After-closing block
16. \\end{g-brief}
17. After-letter block
18. \\end{document}

Empty fields produce no macro at all. Only the footer columns always emit.
"""
from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from ...models.letter import LetterField, SettingScope
from .context import ExportContext
from .macro_blocks import format_footer_blocks, format_macro_block
from .resolver import ValueResolver, get_resolver
from .templates import (
    CLOSING_MACRO,
    CLOSING_SPACING,
    DATE_MACRO,
    DOCUMENT_BEGIN,
    DOCUMENT_END,
    FROM_ADDRESS_MACRO,
    LETTER_BEGIN,
    LETTER_END,
    NAME_MACRO,
    OPENING_MACRO,
    SETTINGS_ORDER,
    SIGNATURE_MACRO,
    SUBJECT_MACRO,
    SWITCH_MACROS,
    TIMESTAMP_FORMAT,
    TO_ADDRESS_MACRO,
    macro,
)


CREATOR = "gbrief-letter"


class LetterTemplateAssembler:
    """Builds the complete document text for one export."""

    def __init__(self, resolver: Optional[ValueResolver] = None):
        self.resolver = resolver or get_resolver()

    def assemble(self, context: ExportContext, body: str, now: Optional[datetime] = None) -> str:
        """
        Args:
            context: export context after the tree walk
            body: rendered letter body (special headings already removed)
            now: creation time for the timestamp comment

        Returns:
            Full LaTeX document
        """
        settings = context.settings
        store = context.store

        def field(f: LetterField) -> str:
            return self.resolver.resolve(f, context)

        parts: List[str] = []

        # 1-2. Timestamp and preamble
        if settings.get("with_timestamp"):
            parts.append((now or datetime.now()).strftime(TIMESTAMP_FORMAT))
        parts.append(context.backend.document_preamble(settings))

        # 3. Settings, global scope then buffer scope
        parts.append(self.settings_block(context, SettingScope.GLOBAL))
        parts.append(self.settings_block(context, SettingScope.BUFFER))

        # 4. Footer columns
        parts.append(format_footer_blocks(store))

        # 5-6. Return address and date
        from_address = field(LetterField.FROM)
        if from_address:
            parts.append(macro(FROM_ADDRESS_MACRO, from_address))
        date = field(LetterField.DATE)
        if date:
            parts.append(macro(DATE_MACRO, date))

        # 7-8. Metadata and subject
        subject = field(LetterField.SUBJECT)
        parts.append(context.backend.metadata_block({
            "a": field(LetterField.AUTHOR),
            "t": subject,
            "k": context.backend.render_text(context.document.keyword_value("KEYWORDS")),
            "d": context.backend.render_text(context.document.keyword_value("DESCRIPTION")),
            "c": CREATOR,
            "L": settings.get("language") or "",
        }))
        if subject:
            parts.append(macro(SUBJECT_MACRO, subject))

        # 9-11. Opening, closing, recipient
        opening = field(LetterField.OPENING)
        if opening:
            parts.append(macro(OPENING_MACRO, opening))
        closing = field(LetterField.CLOSING)
        if closing:
            parts.append(macro(CLOSING_MACRO, closing, CLOSING_SPACING))
        signature = field(LetterField.SIGNATURE)
        if signature:
            parts.append(macro(SIGNATURE_MACRO, signature))
        to_address = field(LetterField.TO)
        if to_address:
            parts.append(macro(TO_ADDRESS_MACRO, to_address))

        # 12-14. Body
        parts.append(DOCUMENT_BEGIN)
        parts.append(LETTER_BEGIN)
        if body:
            parts.append(body if body.endswith("\n") else body + "\n")

        # 15-18. Trailing blocks
        parts.append(format_macro_block(settings.get("after_closing_order") or [], store))
        parts.append(LETTER_END)
        parts.append(format_macro_block(
            settings.get("after_letter_order") or [], store, keep_newlines=True, no_tag=True,
        ))
        parts.append(DOCUMENT_END)

        return "".join(parts)

    def settings_block(self, context: ExportContext, scope: SettingScope) -> str:
        """
        Switch macros for the settings whose effective value comes from scope.

        A boolean switch only emits when true.
        """
        parts: List[str] = []
        for name in SETTINGS_ORDER:
            if context.settings.scope(name) != scope or not context.settings.get(name):
                continue
            if name == "use_name":
                author = self.resolver.resolve(LetterField.AUTHOR, context)
                if author:
                    parts.append(macro(NAME_MACRO, author))
            else:
                parts.append(macro(SWITCH_MACROS[name]))
        return "".join(parts)


_assembler: Optional[LetterTemplateAssembler] = None


def get_assembler() -> LetterTemplateAssembler:
    """Get or create the default assembler singleton."""
    global _assembler
    if _assembler is None:
        _assembler = LetterTemplateAssembler()
    return _assembler


def assemble_letter(context: ExportContext, body: str, now: Optional[datetime] = None) -> str:
    """Convenience function using the default assembler."""
    return get_assembler().assemble(context, body, now=now)
