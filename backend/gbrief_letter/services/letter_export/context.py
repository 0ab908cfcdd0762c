"""
Export Context

Everything one export needs, created fresh per export and passed explicitly
into every hook. There is no module-level store.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ...config import LetterConfig
from ...models.document import Document
from ...models.letter import LetterSettings, TaggedContentStore
from .backend import ExportBackend, LatexBackend
from .options import build_settings


@dataclass
class ExportContext:
    document: Document
    settings: LetterSettings
    store: TaggedContentStore
    backend: ExportBackend

    @classmethod
    def create(
        cls,
        document: Document,
        config: LetterConfig,
        backend: Optional[ExportBackend] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "ExportContext":
        """Fresh settings snapshot and an empty store for one export."""
        return cls(
            document=document,
            settings=build_settings(config, document.keywords(), overrides),
            store=TaggedContentStore(config.duplicate_tag_policy),
            backend=backend or LatexBackend(),
        )
