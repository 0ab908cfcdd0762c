"""
Macro-Block Formatter

Turns stored tagged content into macro blocks:

- after-closing tags: \\ps{...}, \\encl{...}, \\cc{...} (trimmed, wrapped)
- after-letter tags: raw contents, newlines kept
- footer columns: exactly six \\<Prefix>A..F{...} lines per column
"""
from __future__ import annotations
import logging
from typing import Iterable, List

from ...models.letter import TaggedContentStore
from .templates import FOOTER_BLOCKS, FOOTER_SLOTS, macro

logger = logging.getLogger(__name__)


def format_macro_block(
    tags: Iterable[str],
    store: TaggedContentStore,
    keep_newlines: bool = False,
    no_tag: bool = False,
) -> str:
    """
    Format stored contents for the given tags, in the given order.

    Args:
        tags: ordered tag names
        store: tagged-content store of the current export
        keep_newlines: keep surrounding whitespace instead of trimming it
        no_tag: emit contents verbatim instead of \\<tag>{contents}

    Returns:
        Concatenated contributions; tags absent from the store add nothing
    """
    parts: List[str] = []
    for tag in tags:
        content = store.content(tag)
        if content is None:
            continue
        if not keep_newlines:
            content = content.strip()
        parts.append(content if no_tag else macro(tag, content))
    return "".join(parts)


def format_footer_block(tag: str, prefix: str, store: TaggedContentStore) -> str:
    """
    Six footer macros for one column, filled from the tag's lines.

    Missing lines give empty macros; lines past the sixth are dropped.
    """
    content = (store.content(tag) or "").strip()
    lines = [line.strip() for line in content.splitlines()] if content else []
    if len(lines) > len(FOOTER_SLOTS):
        logger.debug(f"Footer '{tag}' has {len(lines)} lines, keeping {len(FOOTER_SLOTS)}")

    out = []
    for i, slot in enumerate(FOOTER_SLOTS):
        value = lines[i] if i < len(lines) else ""
        out.append(macro(f"{prefix}{slot}", value))
    return "".join(out)


def format_footer_blocks(store: TaggedContentStore) -> str:
    """All footer columns (name, address, phone, internet, bank)."""
    return "".join(format_footer_block(tag, prefix, store) for tag, prefix in FOOTER_BLOCKS)
