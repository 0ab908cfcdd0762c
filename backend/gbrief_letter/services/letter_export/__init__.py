"""
Letter Export - Outline Document to g-brief LaTeX

Components:
- ValueResolver: which source (keyword, tagged heading, default) wins per field
- TaggedContentCollector: routes tagged headings out of the body
- format_macro_block / format_footer_blocks: macro blocks from tagged content
- LetterTemplateAssembler: fixed-order document assembly
- LetterExporter: single pass over the document tree

Usage:
    from gbrief_letter.models import Document, Heading, Keyword, Paragraph
    from gbrief_letter.services.letter_export import export_letter

    doc = Document(elements=[
        Keyword("SUBJECT", "Hello"),
        Keyword("OPENING", "Dear Sir"),
        Paragraph(["Thank you for your letter."]),
        Heading("Copies", tags=["cc"], children=[Paragraph(["Jane Roe"])]),
    ])

    print(export_letter(doc).content)
"""

from .backend import (
    ExportBackend,
    LatexBackend,
    format_spec,
)

from .context import ExportContext

from .options import (
    LETTER_OPTIONS,
    OPTIONS_BY_NAME,
    OPTIONS_BY_KEYWORD,
    OPTIONS_BY_ITEM,
    build_settings,
    coerce_value,
    parse_options_line,
    parse_tag_list,
)

from .collector import (
    TaggedContentCollector,
    get_collector,
    collect_heading,
    recognized_tags,
    special_tag,
)

from .resolver import (
    ValueResolver,
    get_resolver,
    resolve,
    with_line_breaks,
)

from .macro_blocks import (
    format_macro_block,
    format_footer_block,
    format_footer_blocks,
)

from .assembler import (
    LetterTemplateAssembler,
    get_assembler,
    assemble_letter,
)

from . import handlers

from .exporter import (
    LetterExporter,
    export_letter,
)

__all__ = [
    # Backend
    "ExportBackend",
    "LatexBackend",
    "format_spec",
    # Context
    "ExportContext",
    # Options
    "LETTER_OPTIONS",
    "OPTIONS_BY_NAME",
    "OPTIONS_BY_KEYWORD",
    "OPTIONS_BY_ITEM",
    "build_settings",
    "coerce_value",
    "parse_options_line",
    "parse_tag_list",
    # Collector
    "TaggedContentCollector",
    "get_collector",
    "collect_heading",
    "recognized_tags",
    "special_tag",
    # Resolver
    "ValueResolver",
    "get_resolver",
    "resolve",
    "with_line_breaks",
    # Macro blocks
    "format_macro_block",
    "format_footer_block",
    "format_footer_blocks",
    # Assembler
    "LetterTemplateAssembler",
    "get_assembler",
    "assemble_letter",
    # Hooks
    "handlers",
    # Exporter
    "LetterExporter",
    "export_letter",
]
