"""
Paraphrase schemas.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Union
from datetime import datetime

from learnflow.utils.text_utils import clean_variations
from learnflow.utils.time_utils import ensure_utc

ParaphraseId = Union[int, str]


class ParaphraseDraft(BaseModel):
    """User-entered paraphrase before it becomes part of the collection."""
    original: str
    variations: List[str] = Field(default_factory=list)


class Paraphrase(BaseModel):
    """An original phrase with the variations that express the same idea."""
    id: ParaphraseId
    original: str
    variations: List[str] = Field(default_factory=list)
    created: datetime

    @field_validator("created")
    @classmethod
    def attach_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


# ============================================================================
# Shared store (API) schemas
# ============================================================================

class SharedParaphraseCreate(BaseModel):
    """Request schema for creating a shared paraphrase."""
    original: str = Field(..., description="Original phrase")
    variations: List[str] = Field(..., description="At least one non-empty variation")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "original": "It's raining cats and dogs.",
                "variations": ["It's pouring.", "It's raining heavily."]
            }
        }
    )

    @field_validator("original")
    @classmethod
    def validate_original(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("original cannot be empty")
        return v

    @field_validator("variations")
    @classmethod
    def validate_variations(cls, v: List[str]) -> List[str]:
        cleaned = clean_variations(v)
        if not cleaned:
            raise ValueError("at least one non-empty variation is required")
        return cleaned


class SharedParaphraseUpdate(BaseModel):
    """Request schema for a partial shared paraphrase update."""
    original: Optional[str] = None
    variations: Optional[List[str]] = None

    @field_validator("original")
    @classmethod
    def validate_original(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("original cannot be empty")
        return v

    @field_validator("variations")
    @classmethod
    def validate_variations(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        cleaned = clean_variations(v)
        if not cleaned:
            raise ValueError("at least one non-empty variation is required")
        return cleaned


class SharedParaphraseResponse(BaseModel):
    """Shared paraphrase response schema."""
    id: int
    original: str
    variations: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
