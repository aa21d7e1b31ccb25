"""
SharedCard model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone


class SharedCard(SQLModel, table=True):
    """Shared cards table - authoritative card content (no scheduling state)."""
    __tablename__ = "shared_cards"

    id: Optional[int] = Field(default=None, primary_key=True)
    front: str
    back: str
    translation: str = Field(default="")
    example: str = Field(default="")
    unit: str = Field(default="General", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
