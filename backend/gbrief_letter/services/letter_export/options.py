"""
Letter Options

The option table plus the per-document layer: keywords (#+SUBJECT: ...) and
#+OPTIONS: items (foldmarks:nil after-closing-order:(cc ps)) are coerced and
layered over the configured defaults.

Invalid per-document values never abort an export. They are logged and the
option keeps its configured value.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ...config import LetterConfig, parse_bool
from ...models.document import Keyword
from ...models.letter import LetterOption, LetterSettings, OptionKind

logger = logging.getLogger(__name__)


# =============================================================================
# OPTION TABLE
# =============================================================================

LETTER_OPTIONS: List[LetterOption] = [
    LetterOption("author", OptionKind.STRING, "Sender name", keyword="AUTHOR"),
    LetterOption("from_address", OptionKind.STRING, "Sender address", keyword="FROM_ADDRESS"),
    LetterOption("to_address", OptionKind.STRING, "Recipient address", keyword="TO_ADDRESS"),
    LetterOption("opening", OptionKind.STRING, "Salutation", keyword="OPENING"),
    LetterOption("closing", OptionKind.STRING, "Closing formula", keyword="CLOSING"),
    LetterOption("signature", OptionKind.STRING, "Text printed under the closing", keyword="SIGNATURE"),
    LetterOption("subject", OptionKind.STRING, "Subject line", keyword="SUBJECT"),
    LetterOption("date", OptionKind.STRING, "Letter date", keyword="DATE"),
    LetterOption("language", OptionKind.STRING, "Document language code", keyword="LANGUAGE"),
    LetterOption("latex_class", OptionKind.STRING, "LaTeX document class", keyword="LATEX_CLASS"),
    LetterOption("latex_class_options", OptionKind.STRING, "LaTeX class options", keyword="LATEX_CLASS_OPTIONS"),
    LetterOption("latex_header", OptionKind.STRING, "Extra preamble lines", keyword="LATEX_HEADER"),
    LetterOption("prefer_special_headings", OptionKind.BOOL,
                 "Tagged to/from headings beat TO_ADDRESS/FROM_ADDRESS", item="special-headings"),
    LetterOption("use_name", OptionKind.BOOL, "Print \\Name{author}", item="name"),
    LetterOption("use_our_reference", OptionKind.BOOL, "Print the 'our reference' field", item="our-ref"),
    LetterOption("use_foldmarks", OptionKind.BOOL, "Print fold marks", item="foldmarks"),
    LetterOption("use_punchmarks", OptionKind.BOOL, "Print the punch mark", item="punchmarks"),
    LetterOption("use_windowmarks", OptionKind.BOOL, "Print window envelope marks", item="windowmarks"),
    LetterOption("use_separators", OptionKind.BOOL, "Print footer separator lines", item="separators"),
    LetterOption("headline_is_opening", OptionKind.BOOL,
                 "Use the first plain heading as opening", item="with-headline-opening"),
    LetterOption("with_timestamp", OptionKind.BOOL, "Emit the creation time comment", item="timestamp"),
    LetterOption("after_closing_order", OptionKind.TAG_LIST,
                 "Tags printed after the closing", item="after-closing-order"),
    LetterOption("after_letter_order", OptionKind.TAG_LIST,
                 "Tags printed after the letter", item="after-letter-order"),
]

OPTIONS_BY_NAME: Dict[str, LetterOption] = {o.name: o for o in LETTER_OPTIONS}
OPTIONS_BY_KEYWORD: Dict[str, LetterOption] = {o.keyword: o for o in LETTER_OPTIONS if o.keyword}
OPTIONS_BY_ITEM: Dict[str, LetterOption] = {o.item: o for o in LETTER_OPTIONS if o.item}

# Repeated keywords accumulate line by line instead of replacing each other
MULTILINE_KEYWORDS = {"FROM_ADDRESS", "TO_ADDRESS", "LATEX_HEADER"}

OPTIONS_KEYWORD = "OPTIONS"

_OPTION_ITEM_RE = re.compile(r"([\w-]+):(\([^)]*\)|\S*)")


# =============================================================================
# COERCION
# =============================================================================

def parse_tag_list(value: Any) -> List[str]:
    """Accept (a b), a b, a,b or a list of strings."""
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    text = str(value).strip()
    if text.startswith("(") and text.endswith(")"):
        text = text[1:-1]
    return [t for t in re.split(r"[\s,]+", text) if t]


def coerce_value(option: LetterOption, value: Any) -> Any:
    """
    Convert a raw per-document value to the option's type.

    Raises:
        ValueError: if a boolean option gets a non-boolean value
    """
    if option.kind == OptionKind.BOOL:
        return parse_bool(value)
    if option.kind == OptionKind.TAG_LIST:
        return parse_tag_list(value)
    return "" if value is None else str(value)


def parse_options_line(line: str) -> List[Tuple[str, str]]:
    """Split an #+OPTIONS: value into (item, value) pairs."""
    return [(m.group(1), m.group(2)) for m in _OPTION_ITEM_RE.finditer(line or "")]


# =============================================================================
# SETTINGS BUILDER
# =============================================================================

def collect_overrides(keywords: Iterable[Keyword]) -> Dict[str, Any]:
    """
    Build the per-document override layer from document keywords.

    Unknown keywords are left to the backend. Unknown #+OPTIONS: items and
    unparseable values are logged and dropped.
    """
    raw: Dict[str, Any] = {}
    for kw in keywords:
        if kw.key == OPTIONS_KEYWORD:
            for item, value in parse_options_line(kw.value):
                option = OPTIONS_BY_ITEM.get(item)
                if option is None:
                    logger.warning(f"Ignoring unknown letter option item '{item}'")
                    continue
                raw[option.name] = value
            continue

        option = OPTIONS_BY_KEYWORD.get(kw.key)
        if option is None:
            continue
        if kw.key in MULTILINE_KEYWORDS and option.name in raw:
            raw[option.name] = f"{raw[option.name]}\n{kw.value}"
        else:
            raw[option.name] = kw.value

    return coerce_overrides(raw)


def coerce_overrides(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Coerce a name -> raw value mapping, dropping invalid entries."""
    overrides: Dict[str, Any] = {}
    for name, value in raw.items():
        option = OPTIONS_BY_NAME.get(name)
        if option is None:
            logger.warning(f"Ignoring unknown letter option '{name}'")
            continue
        try:
            overrides[name] = coerce_value(option, value)
        except ValueError as e:
            logger.warning(f"Ignoring value for '{name}': {e}")
    return overrides


def build_settings(
    config: LetterConfig,
    keywords: Iterable[Keyword] = (),
    extra_overrides: Optional[Mapping[str, Any]] = None,
) -> LetterSettings:
    """
    Layer document overrides over configured defaults.

    Args:
        config: configured defaults (global scope)
        keywords: document keywords (buffer scope)
        extra_overrides: name -> value overrides supplied by the caller; these
            count as document overrides and beat keywords

    Returns:
        Read-only LetterSettings
    """
    overrides = collect_overrides(keywords)
    if extra_overrides:
        overrides.update(coerce_overrides(extra_overrides))
    return LetterSettings(defaults=config.option_defaults(), overrides=overrides)
