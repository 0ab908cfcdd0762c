"""
g-brief Letter Exporter - Configuration

Global defaults for every letter option. Documents override these through
keywords and #+OPTIONS: items; see services/letter_export/options.py.

Environment variables (all optional):
    GBRIEF_AUTHOR                   default sender name
    GBRIEF_CLASS                    LaTeX class (g-brief)
    GBRIEF_CLASS_OPTIONS            class options ([11pt])
    GBRIEF_FOLDMARKS                print fold marks (true)
    GBRIEF_PUNCHMARKS               print punch mark (true)
    GBRIEF_WINDOWMARKS              print window marks (false)
    GBRIEF_SEPARATORS               print footer separator lines (false)
    GBRIEF_PREFER_SPECIAL_HEADINGS  tagged headings beat keywords (false)
    GBRIEF_DUPLICATE_TAGS           "last" or "first"
    GBRIEF_TIMESTAMP                emit the "% Created" comment (true)
"""
import os
from dataclasses import dataclass, field, fields
from typing import Callable, List, Optional, Union

from .models.letter import AFTER_CLOSING_TAGS, AFTER_LETTER_TAGS, DuplicateTagPolicy

TRUE_VALUES = {"t", "true", "yes", "on", "1"}
FALSE_VALUES = {"nil", "false", "no", "off", "0", ""}


def parse_bool(value: Union[str, bool, int]) -> bool:
    """Parse t/nil style booleans. Raises ValueError on anything else."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def user_full_name() -> str:
    """Default author: the configured sender name."""
    return os.getenv("GBRIEF_AUTHOR", "")


AuthorSource = Union[str, Callable[[], str], None]


@dataclass
class LetterConfig:
    """Configured defaults ("global" scope) for a letter export."""
    # Sender name: a string, a zero-argument callable, or None to disable
    author: AuthorSource = user_full_name
    from_address: str = ""
    to_address: str = ""
    opening: str = ""
    closing: str = ""
    signature: str = ""
    subject: str = ""
    date: str = "\\today"
    language: str = "en"
    latex_class: str = "g-brief"
    latex_class_options: str = "[11pt]"
    latex_header: str = ""

    prefer_special_headings: bool = False
    use_name: bool = True
    use_our_reference: bool = False
    use_foldmarks: bool = True
    use_punchmarks: bool = True
    use_windowmarks: bool = False
    use_separators: bool = False
    headline_is_opening: bool = True
    with_timestamp: bool = True

    after_closing_order: List[str] = field(default_factory=lambda: list(AFTER_CLOSING_TAGS))
    after_letter_order: List[str] = field(default_factory=lambda: list(AFTER_LETTER_TAGS))

    duplicate_tag_policy: DuplicateTagPolicy = DuplicateTagPolicy.LAST_WINS

    def __post_init__(self):
        self.duplicate_tag_policy = DuplicateTagPolicy(self.duplicate_tag_policy)

    @classmethod
    def from_env(cls) -> "LetterConfig":
        """Build a config from GBRIEF_* environment variables."""
        config = cls()
        if os.getenv("GBRIEF_CLASS"):
            config.latex_class = os.getenv("GBRIEF_CLASS")
        if os.getenv("GBRIEF_CLASS_OPTIONS") is not None:
            config.latex_class_options = os.getenv("GBRIEF_CLASS_OPTIONS")

        bool_vars = {
            "GBRIEF_FOLDMARKS": "use_foldmarks",
            "GBRIEF_PUNCHMARKS": "use_punchmarks",
            "GBRIEF_WINDOWMARKS": "use_windowmarks",
            "GBRIEF_SEPARATORS": "use_separators",
            "GBRIEF_PREFER_SPECIAL_HEADINGS": "prefer_special_headings",
            "GBRIEF_TIMESTAMP": "with_timestamp",
        }
        for var, attr in bool_vars.items():
            raw = os.getenv(var)
            if raw is not None:
                setattr(config, attr, parse_bool(raw))

        policy = os.getenv("GBRIEF_DUPLICATE_TAGS")
        if policy:
            # ValueError for anything but "last"/"first"
            config.duplicate_tag_policy = DuplicateTagPolicy(policy.strip().lower())
        return config

    def option_defaults(self) -> dict:
        """Every option default keyed by option name (no policy)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "duplicate_tag_policy"
        }


_config: Optional[LetterConfig] = None


def get_config() -> LetterConfig:
    """Get or create the environment-driven config singleton."""
    global _config
    if _config is None:
        _config = LetterConfig.from_env()
    return _config


def reset_config() -> None:
    """Forget the cached config (environment changed)."""
    global _config
    _config = None
