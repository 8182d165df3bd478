"""Document index models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocCategory(str, Enum):
    """Display categories for documents."""

    GUIDE = "Guide"
    SECURITY = "Security"
    REFERENCE = "Reference"
    PROJECT = "Project"
    SYSTEM = "System"
    SPEC = "Spec"
    AI_PULSE = "AI Pulse"
    REPORT = "Report"

    @classmethod
    def values(cls) -> list[str]:
        return [c.value for c in cls]

    @classmethod
    def is_valid(cls, value: str | None) -> bool:
        return value in cls.values()


DEFAULT_CATEGORY = DocCategory.REFERENCE
DEFAULT_EMOJI = "📄"

CATEGORY_ICONS: dict[DocCategory, str] = {
    DocCategory.SECURITY: "🚨",
    DocCategory.GUIDE: "📘",
    DocCategory.REFERENCE: "🧠",
    DocCategory.AI_PULSE: "📰",
    DocCategory.SYSTEM: "⚙️",
    DocCategory.PROJECT: "📁",
}


def icon_for_category(category: str | None) -> str:
    """Default emoji for a category, falling back to the generic page glyph."""
    try:
        return CATEGORY_ICONS.get(DocCategory(category), DEFAULT_EMOJI)
    except ValueError:
        return DEFAULT_EMOJI


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IndexEntry(BaseModel):
    """Display metadata for one document, as stored in the index manifest."""

    # Hand-added keys in the manifest survive a load/save cycle
    model_config = ConfigDict(extra="allow")

    filename: str
    title: str
    emoji: str = DEFAULT_EMOJI
    category: str = DEFAULT_CATEGORY.value
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<IndexEntry(filename={self.filename!r}, title={self.title!r})>"


class IndexManifest(BaseModel):
    """The persisted documents-index.json document."""

    documents: list[IndexEntry] = Field(default_factory=list)


class DocumentStats(BaseModel):
    """Word and character counts for a document body."""

    filename: str
    words: int
    characters: int
