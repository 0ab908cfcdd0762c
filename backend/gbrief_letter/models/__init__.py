"""g-brief Letter Exporter - Data Models"""
from .document import (
    Keyword, ExportSnippet, ExportBlock, Paragraph, Heading, Element, Document,
)
from .letter import (
    # Tags
    IN_LETTER_TAGS, AFTER_CLOSING_TAGS, AFTER_LETTER_TAGS, EMPTY_TITLE_TAG,
    # Enums
    TagGroup, LetterField, SettingScope, DuplicateTagPolicy, OptionKind,
    # Settings
    LetterOption, LetterSettings,
    # Tagged content
    TaggedContentEntry, TaggedContentStore,
    # Output
    ExportResult,
)

__all__ = [
    "Keyword", "ExportSnippet", "ExportBlock", "Paragraph", "Heading", "Element", "Document",
    "IN_LETTER_TAGS", "AFTER_CLOSING_TAGS", "AFTER_LETTER_TAGS", "EMPTY_TITLE_TAG",
    "TagGroup", "LetterField", "SettingScope", "DuplicateTagPolicy", "OptionKind",
    "LetterOption", "LetterSettings",
    "TaggedContentEntry", "TaggedContentStore",
    "ExportResult",
]
