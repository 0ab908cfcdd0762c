"""
Document Tree Models - Parsed Outline Input

These models stand in for the parse tree handed over by the outline export
engine. Parsing the outline source is NOT done here; callers build the tree
(directly or through the HTTP layer) and the exporter walks it once.

Element kinds:
- Keyword: document-level directive (#+SUBJECT:, #+OPENING:, ...)
- Paragraph: plain text parts and inline export snippets
- ExportBlock: raw block aimed at one backend
- Heading: titled node with tags and nested elements
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class Keyword:
    """A document keyword. Keys are stored upper-cased."""
    key: str
    value: str = ""

    def __post_init__(self):
        self.key = self.key.upper()


@dataclass
class ExportSnippet:
    """Inline raw text targeted at a single backend (e.g. @@g-brief:...@@)."""
    backend: str
    value: str

    def __post_init__(self):
        self.backend = self.backend.lower()


@dataclass
class ExportBlock:
    """Raw block targeted at a single backend (#+BEGIN_EXPORT <type>)."""
    block_type: str
    value: str

    def __post_init__(self):
        self.block_type = self.block_type.upper()


@dataclass
class Paragraph:
    """A paragraph made of plain strings and inline export snippets."""
    parts: List[Union[str, ExportSnippet]] = field(default_factory=list)


@dataclass
class Heading:
    """
    A titled outline node.

    Tags route the heading's contents to a template slot instead of the
    letter body. Children are rendered before the heading hook runs.
    """
    title: str
    tags: List[str] = field(default_factory=list)
    children: List["Element"] = field(default_factory=list)
    level: int = 1

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


Element = Union[Keyword, Paragraph, ExportBlock, Heading]


@dataclass
class Document:
    """Top-level parsed document."""
    elements: List[Element] = field(default_factory=list)

    def keywords(self) -> List[Keyword]:
        """Every top-level keyword in document order."""
        return [e for e in self.elements if isinstance(e, Keyword)]

    def keyword_value(self, key: str, default: str = "") -> str:
        """Last value of a keyword, or default when absent."""
        key = key.upper()
        value = default
        for kw in self.keywords():
            if kw.key == key:
                value = kw.value
        return value

    def top_level_headings(self) -> List[Heading]:
        """Level-1 headings among the top-level elements."""
        return [e for e in self.elements if isinstance(e, Heading) and e.level == 1]
