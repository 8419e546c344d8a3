"""
Schemas Module - Pydantic data models for the application.
==========================================================

Defines the data contracts shared across the application:
- Catalog enums (text types, academic programs)
- Search results and search filters
- Reader blocks produced by the document renderer
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────


class TextType(str, Enum):
    """Document category offered by the catalog."""

    LIBRO = "Libro"
    ARTICULO = "Artículo Académico"


class Carrera(str, Enum):
    """Academic programs of the faculty, used as a search filter."""

    COMUNICACION_SOCIAL = "Lic. en Comunicación Social"
    PERIODISMO_DEPORTIVO = "Periodismo Deportivo"
    COMUNICACION_POPULAR = "Comunicación Popular"
    COMUNICACION_DIGITAL = "Comunicación Digital"
    COMUNICACION_PUBLICA = "Comunicación Pública y Política"
    PROFESORADO = "Profesorado en Comunicación"


class BlockKind(str, Enum):
    """Kinds of blocks in a rendered document."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    SPACER = "spacer"


class SpanKind(str, Enum):
    """Inline span styles inside a paragraph."""

    PLAIN = "plain"
    KEYWORD = "keyword"
    BOLD = "bold"


# ─────────────────────────────────────────────────────────────────────────────
# Catalog Models
# ─────────────────────────────────────────────────────────────────────────────


class SearchResult(BaseModel):
    """
    A bibliographic record synthesized by the model.

    Nothing here comes from a real index: every field is generated text,
    validated only for shape.
    """

    id: str = Field(..., min_length=1, description="Identifier unique within one result list")
    title: str = Field(..., min_length=1, description="Exact title of the work")
    author: str = Field(default="", description="Author(s)")
    year: int = Field(..., description="Publication year")
    type: TextType = Field(..., description="Book or academic article")
    abstract: str = Field(default="", description="How the text is used in the course")
    keywords: list[str] = Field(default_factory=list)
    location: str = Field(default="", description="Course (cátedra) where the text is used")

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keywords(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [k.strip() for k in v.split(",") if k.strip()]
        return [str(k).strip() for k in v if str(k).strip()]

    def card_keywords(self, limit: int = 4) -> list[str]:
        """Keywords shown as tags on a result card."""
        return self.keywords[:limit]


class SearchFilters(BaseModel):
    """Optional filters that narrow a catalog search."""

    type: Optional[TextType] = None
    carrera: Optional[Carrera] = None
    year_from: Optional[int] = Field(default=None, ge=0)
    year_to: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_year_range(self) -> "SearchFilters":
        if (
            self.year_from is not None
            and self.year_to is not None
            and self.year_from > self.year_to
        ):
            raise ValueError("year_from must not be greater than year_to")
        return self

    @property
    def has_year_range(self) -> bool:
        return self.year_from is not None or self.year_to is not None

    def is_empty(self) -> bool:
        return self.type is None and self.carrera is None and not self.has_year_range


# ─────────────────────────────────────────────────────────────────────────────
# Reader Models
# ─────────────────────────────────────────────────────────────────────────────


class TextSpan(BaseModel):
    """A run of inline text with a single style."""

    text: str
    kind: SpanKind = SpanKind.PLAIN


class Block(BaseModel):
    """One line of a rendered document."""

    kind: BlockKind
    level: int = 0
    spans: list[TextSpan] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Plain text of the block, styles dropped."""
        return "".join(span.text for span in self.spans)
