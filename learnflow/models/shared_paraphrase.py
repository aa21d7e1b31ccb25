"""
SharedParaphrase model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, List
from datetime import datetime, timezone
from sqlalchemy import Column, JSON


class SharedParaphrase(SQLModel, table=True):
    """Paraphrases table - an original phrase and its accepted variations."""
    __tablename__ = "paraphrases"

    id: Optional[int] = Field(default=None, primary_key=True)
    original: str
    variations: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
