"""
Card schemas.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Union
from datetime import datetime

from learnflow.utils.time_utils import ensure_utc

# Remote records use integer ids; locally generated ids are integers too,
# but any stable opaque key is accepted.
CardId = Union[int, str]

DEFAULT_UNIT = "General"


def _clean_required(value: str, field_name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field_name} cannot be empty")
    return value


class CardDraft(BaseModel):
    """User-entered card content before it becomes part of the collection."""
    front: str
    back: str
    translation: str = ""
    example: str = ""
    unit: str = ""


class Card(BaseModel):
    """A flashcard in the in-memory collection, including its Leitner state."""
    id: CardId
    front: str
    back: str
    translation: str = ""
    example: str = ""
    unit: str = DEFAULT_UNIT
    box: int = Field(1, ge=1, le=5)
    reviews: int = Field(0, ge=0)
    last_review: Optional[datetime] = None
    next_review: Optional[datetime] = None  # None means "due now"
    created: datetime

    @field_validator("last_review", "next_review", "created")
    @classmethod
    def attach_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)


class CollectionStats(BaseModel):
    """Box distribution of a card collection."""
    total: int
    mastered: int
    learning: int
    new: int
    progress: float = Field(..., description="Percentage of mastered cards (0-100)")


# ============================================================================
# Shared store (API) schemas
# ============================================================================

class SharedCardCreate(BaseModel):
    """Request schema for creating a shared card."""
    front: str = Field(..., description="Question side")
    back: str = Field(..., description="Answer side")
    translation: str = Field("", description="Optional translation")
    example: str = Field("", description="Optional usage example")
    unit: str = Field(DEFAULT_UNIT, description="Unit label (defaults to 'General')")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "front": "la maison",
                "back": "the house",
                "translation": "",
                "example": "La maison est grande.",
                "unit": "Unit 1"
            }
        }
    )

    @field_validator("front")
    @classmethod
    def validate_front(cls, v: str) -> str:
        return _clean_required(v, "front")

    @field_validator("back")
    @classmethod
    def validate_back(cls, v: str) -> str:
        return _clean_required(v, "back")

    @field_validator("translation", "example", mode="before")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> str:
        return (v or "").strip()

    @field_validator("unit", mode="before")
    @classmethod
    def default_unit(cls, v: Optional[str]) -> str:
        return (v or "").strip() or DEFAULT_UNIT


class SharedCardUpdate(BaseModel):
    """Request schema for a partial shared card update."""
    front: Optional[str] = None
    back: Optional[str] = None
    translation: Optional[str] = None
    example: Optional[str] = None
    unit: Optional[str] = None

    @field_validator("front")
    @classmethod
    def validate_front(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _clean_required(v, "front")

    @field_validator("back")
    @classmethod
    def validate_back(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _clean_required(v, "back")

    @field_validator("translation", "example")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else v.strip()

    @field_validator("unit")
    @classmethod
    def default_unit(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else (v.strip() or DEFAULT_UNIT)


class SharedCardResponse(BaseModel):
    """Shared card response schema."""
    id: int
    front: str
    back: str
    translation: Optional[str] = ""
    example: Optional[str] = ""
    unit: Optional[str] = DEFAULT_UNIT
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
