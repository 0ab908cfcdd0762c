"""
Letter Models - Settings, Tagged Content and Export Results

Core Principle: every export starts from a fresh settings snapshot and an
empty tagged-content store. Nothing here is shared between exports.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


# =============================================================================
# TAGS
# =============================================================================

# Tags consumed inside the letter (addresses, closing, footer columns)
IN_LETTER_TAGS: Tuple[str, ...] = (
    "to", "from", "closing", "address", "bank", "internet", "name", "phone",
)

# Tags printed after the closing, wrapped in \<tag>{...}
AFTER_CLOSING_TAGS: Tuple[str, ...] = ("ps", "encl", "cc")

# Tags printed verbatim after the g-brief environment
AFTER_LETTER_TAGS: Tuple[str, ...] = ("after_letter",)

# A heading with this tag contributes an empty title when used as opening
EMPTY_TITLE_TAG = "empty"


class TagGroup(str, Enum):
    IN_LETTER = "in_letter"
    AFTER_CLOSING = "after_closing"
    AFTER_LETTER = "after_letter"


class LetterField(str, Enum):
    """Semantic fields the resolver knows how to compute."""
    TO = "to"
    FROM = "from"
    OPENING = "opening"
    CLOSING = "closing"
    SIGNATURE = "signature"
    AUTHOR = "author"
    SUBJECT = "subject"
    DATE = "date"


class SettingScope(str, Enum):
    """Where an effective setting value came from."""
    GLOBAL = "global"   # configured default
    BUFFER = "buffer"   # per-document keyword or option


class DuplicateTagPolicy(str, Enum):
    """What happens when two headings carry the same recognized tag."""
    LAST_WINS = "last"
    FIRST_WINS = "first"


class OptionKind(str, Enum):
    BOOL = "bool"
    STRING = "string"
    TAG_LIST = "tag_list"


# =============================================================================
# OPTIONS / SETTINGS
# =============================================================================

@dataclass(frozen=True)
class LetterOption:
    """
    One configurable letter option.

    keyword: per-document keyword overriding the option (#+KEYWORD: value)
    item: per-document #+OPTIONS: item overriding the option (item:value)
    """
    name: str
    kind: OptionKind
    description: str
    keyword: Optional[str] = None
    item: Optional[str] = None


class LetterSettings:
    """
    Effective document settings built from two explicit layers.

    defaults: configured (global) values for every option
    overrides: values set by the document itself

    A value present in overrides always wins. Both layers are read-only once
    the settings object exists.
    """

    def __init__(self, defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]] = None):
        self._defaults = MappingProxyType(dict(defaults))
        self._overrides = MappingProxyType(dict(overrides or {}))

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._defaults

    @property
    def overrides(self) -> Mapping[str, Any]:
        return self._overrides

    def get(self, name: str, default: Any = None) -> Any:
        if name in self._overrides:
            return self._overrides[name]
        return self._defaults.get(name, default)

    def __getitem__(self, name: str) -> Any:
        if name in self._overrides:
            return self._overrides[name]
        return self._defaults[name]

    def __contains__(self, name: str) -> bool:
        return name in self._overrides or name in self._defaults

    def is_overridden(self, name: str) -> bool:
        return name in self._overrides

    def scope(self, name: str) -> SettingScope:
        return SettingScope.BUFFER if name in self._overrides else SettingScope.GLOBAL

    def as_dict(self) -> Dict[str, Any]:
        """Flattened effective values."""
        merged = dict(self._defaults)
        merged.update(self._overrides)
        return merged

    def __repr__(self) -> str:
        return f"LetterSettings(overrides={sorted(self._overrides)})"


# =============================================================================
# TAGGED CONTENT
# =============================================================================

@dataclass(frozen=True)
class TaggedContentEntry:
    """Rendered contents of one special heading."""
    tag: str
    content: str


class TaggedContentStore:
    """
    Tag -> entry mapping filled while headings are visited.

    At most one entry exists per tag. Which heading wins when several share a
    tag is decided by the policy.
    """

    def __init__(self, policy: DuplicateTagPolicy = DuplicateTagPolicy.LAST_WINS):
        self.policy = DuplicateTagPolicy(policy)
        self._entries: Dict[str, TaggedContentEntry] = {}

    def record(self, tag: str, content: str) -> bool:
        """
        Store content for a tag.

        Returns:
            True if the content was stored, False if it was ignored because of
            FIRST_WINS.
        """
        if tag in self._entries:
            if self.policy == DuplicateTagPolicy.FIRST_WINS:
                logger.debug(f"Ignoring duplicate heading for tag '{tag}' (first wins)")
                return False
            logger.debug(f"Replacing earlier heading for tag '{tag}' (last wins)")
            # re-insert so iteration order follows the winning heading
            del self._entries[tag]
        self._entries[tag] = TaggedContentEntry(tag=tag, content=content)
        return True

    def get(self, tag: str) -> Optional[TaggedContentEntry]:
        return self._entries.get(tag)

    def content(self, tag: str) -> Optional[str]:
        entry = self._entries.get(tag)
        return entry.content if entry else None

    def tags(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, tag: str) -> bool:
        return tag in self._entries

    def __iter__(self) -> Iterator[TaggedContentEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# EXPORT RESULT
# =============================================================================

@dataclass
class ExportResult:
    """Output of one letter export."""
    content: str
    collected_tags: List[str] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "content": self.content,
            "collected_tags": self.collected_tags,
            "settings": self.settings,
            "generated_at": self.generated_at.isoformat(),
        }
