"""
Import/export schemas.
"""
from enum import Enum
from pydantic import BaseModel


class CardFormat(str, Enum):
    """Text formats supported for card import and export."""
    CSV = "csv"
    TSV = "tsv"
    QUIZLET = "quizlet"
    JSON = "json"


class ExportFile(BaseModel):
    """Serialized cards ready to be written or downloaded."""
    filename: str
    media_type: str
    content: str
