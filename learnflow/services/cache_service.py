"""
Local cache service.

A small key-value store persisted as one JSON document. Each key holds a
serialized list (the full card or paraphrase collection). The cache is
rewritten after every mutation and read once at startup; unreadable
content is treated as "nothing cached".
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from learnflow.schemas.card import Card
from learnflow.schemas.paraphrase import Paraphrase

logger = logging.getLogger(__name__)

CARDS_KEY = "flashcards"
PARAPHRASES_KEY = "paraphrases"

_cards_adapter = TypeAdapter(List[Card])
_paraphrases_adapter = TypeAdapter(List[Paraphrase])


class LocalCache:
    """JSON-file backed key-value cache for the study collections."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring cache file {self.path}: expected a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        """Raw serialized value for a key, or None."""
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a raw serialized value under a key."""
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def load_cards(self) -> List[Card]:
        """Cached card collection; malformed content yields an empty list."""
        raw = self.get(CARDS_KEY)
        if not raw:
            return []
        try:
            return _cards_adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(f"Error loading cached cards, ignoring cache: {e.error_count()} error(s)")
            return []

    def save_cards(self, cards: List[Card]) -> None:
        self.set(CARDS_KEY, _cards_adapter.dump_json(cards).decode("utf-8"))

    def load_paraphrases(self) -> List[Paraphrase]:
        """Cached paraphrase collection; malformed content yields an empty list."""
        raw = self.get(PARAPHRASES_KEY)
        if not raw:
            return []
        try:
            return _paraphrases_adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(f"Error loading cached paraphrases, ignoring cache: {e.error_count()} error(s)")
            return []

    def save_paraphrases(self, paraphrases: List[Paraphrase]) -> None:
        self.set(PARAPHRASES_KEY, _paraphrases_adapter.dump_json(paraphrases).decode("utf-8"))
