"""
g-brief Letter Exporter - Letters API Router

Exports parsed outline documents sent as JSON trees to g-brief LaTeX.
Parsing the outline source happens on the client side.
"""
import dataclasses
import logging
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..config import get_config
from ..models import (
    AFTER_CLOSING_TAGS,
    AFTER_LETTER_TAGS,
    IN_LETTER_TAGS,
    Document,
    ExportBlock,
    ExportSnippet,
    Heading,
    Keyword,
    Paragraph,
)
from ..services.letter_export import (
    LETTER_OPTIONS,
    OPTIONS_BY_NAME,
    LetterExporter,
    coerce_value,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/letters", tags=["letters"])


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class KeywordModel(BaseModel):
    type: Literal["keyword"] = "keyword"
    key: str
    value: str = ""


class SnippetModel(BaseModel):
    type: Literal["snippet"] = "snippet"
    backend: str
    value: str = ""


class ParagraphModel(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    parts: List[Union[str, SnippetModel]] = []


class ExportBlockModel(BaseModel):
    type: Literal["export_block"] = "export_block"
    block_type: str
    value: str = ""


class HeadingModel(BaseModel):
    type: Literal["heading"] = "heading"
    title: str
    tags: List[str] = []
    children: List["ElementModel"] = []


ElementModel = Annotated[
    Union[KeywordModel, ParagraphModel, ExportBlockModel, HeadingModel],
    Field(discriminator="type"),
]

HeadingModel.model_rebuild()


class LetterExportRequest(BaseModel):
    elements: List[ElementModel] = []
    options: Dict[str, Any] = {}  # option name -> value, same as document overrides
    duplicate_tag_policy: Optional[str] = None  # "last" or "first"


class LetterExportResponse(BaseModel):
    content: str
    collected_tags: List[str]
    generated_at: datetime


class LetterOptionResponse(BaseModel):
    name: str
    kind: str
    description: str
    keyword: Optional[str] = None
    item: Optional[str] = None
    default: Any = None


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def to_element(model: BaseModel, level: int = 1):
    """Convert an API element model into a document tree element."""
    if isinstance(model, KeywordModel):
        return Keyword(key=model.key, value=model.value)
    if isinstance(model, ParagraphModel):
        return Paragraph(parts=[
            p if isinstance(p, str) else ExportSnippet(backend=p.backend, value=p.value)
            for p in model.parts
        ])
    if isinstance(model, ExportBlockModel):
        return ExportBlock(block_type=model.block_type, value=model.value)
    return Heading(
        title=model.title,
        tags=list(model.tags),
        children=[to_element(c, level + 1) for c in model.children],
        level=level,
    )


def to_document(request: LetterExportRequest) -> Document:
    return Document(elements=[to_element(e) for e in request.elements])


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/export", response_model=LetterExportResponse)
async def export_letter(request: LetterExportRequest):
    """Export a document tree to a g-brief LaTeX letter."""
    config = get_config()
    if request.duplicate_tag_policy:
        try:
            config = dataclasses.replace(config, duplicate_tag_policy=request.duplicate_tag_policy)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown duplicate_tag_policy: {request.duplicate_tag_policy}",
            )

    unknown = sorted(set(request.options) - set(OPTIONS_BY_NAME))
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown letter options: {', '.join(unknown)}")

    # Request options are strict; only document keywords fall back to defaults
    overrides = {}
    for name, value in request.options.items():
        try:
            overrides[name] = coerce_value(OPTIONS_BY_NAME[name], value)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid value for '{name}': {e}")

    result = LetterExporter(config).export(to_document(request), overrides=overrides or None)
    logger.info(f"Exported letter via API: collected tags={result.collected_tags}")

    return LetterExportResponse(
        content=result.content,
        collected_tags=result.collected_tags,
        generated_at=result.generated_at,
    )


@router.get("/options", response_model=List[LetterOptionResponse])
async def list_options():
    """All letter options with their configured defaults."""
    defaults = get_config().option_defaults()
    options = []
    for option in LETTER_OPTIONS:
        default = defaults.get(option.name)
        if callable(default):
            default = default()
        options.append(LetterOptionResponse(
            name=option.name,
            kind=option.kind.value,
            description=option.description,
            keyword=option.keyword,
            item=option.item,
            default=default,
        ))
    return options


@router.get("/tags")
async def list_tags():
    """Recognized heading tags by group."""
    config = get_config()
    return {
        "in_letter": list(IN_LETTER_TAGS),
        "after_closing": list(config.after_closing_order or AFTER_CLOSING_TAGS),
        "after_letter": list(config.after_letter_order or AFTER_LETTER_TAGS),
    }
