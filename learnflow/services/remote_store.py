"""
Client for the shared (remote) card and paraphrase store.

Talks to the Learnflow REST API over HTTP with ``requests``. Every failure
(transport, HTTP status, undecodable body) is raised as RemoteStoreError so
callers can fall back to local-only persistence.
"""
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from learnflow.core.config import settings
from learnflow.core.exceptions import RemoteStoreError
from learnflow.schemas.card import CardDraft, SharedCardCreate, SharedCardResponse, SharedCardUpdate
from learnflow.schemas.paraphrase import (
    ParaphraseDraft,
    SharedParaphraseCreate,
    SharedParaphraseResponse,
    SharedParaphraseUpdate,
)

logger = logging.getLogger(__name__)

_card_list = TypeAdapter(List[SharedCardResponse])
_paraphrase_list = TypeAdapter(List[SharedParaphraseResponse])


class RemoteStore:
    """HTTP client implementing the shared store contract for cards and paraphrases."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.remote_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.remote_timeout_seconds

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise RemoteStoreError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            raise RemoteStoreError(f"{method} {path} returned HTTP {response.status_code}")
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteStoreError(f"{method} {path} returned an invalid body") from e

    @staticmethod
    def _parse(adapter_or_model, data: Any):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(data)
            return adapter_or_model.model_validate(data)
        except PydanticValidationError as e:
            raise RemoteStoreError(f"Unexpected record shape from shared store: {e.error_count()} error(s)") from e

    @staticmethod
    def _card_payload(draft: CardDraft) -> Dict[str, Any]:
        return SharedCardCreate(
            front=draft.front,
            back=draft.back,
            translation=draft.translation,
            example=draft.example,
            unit=draft.unit,
        ).model_dump()

    # Cards

    def fetch_cards(self) -> List[SharedCardResponse]:
        """All shared cards, newest first."""
        return self._parse(_card_list, self._request("GET", "/shared-cards"))

    def insert_card(self, draft: CardDraft) -> SharedCardResponse:
        try:
            payload = self._card_payload(draft)
        except PydanticValidationError as e:
            raise RemoteStoreError(f"Card rejected before upload: {e.error_count()} error(s)") from e
        return self._parse(SharedCardResponse, self._request("POST", "/shared-cards", json=payload))

    def insert_cards_bulk(self, drafts: List[CardDraft]) -> List[SharedCardResponse]:
        """Insert many cards in one call; the whole call succeeds or fails."""
        if not drafts:
            return []
        try:
            payload = [self._card_payload(draft) for draft in drafts]
        except PydanticValidationError as e:
            raise RemoteStoreError(f"Cards rejected before upload: {e.error_count()} error(s)") from e
        return self._parse(_card_list, self._request("POST", "/shared-cards/bulk", json=payload))

    def update_card(self, card_id, fields: SharedCardUpdate) -> SharedCardResponse:
        payload = fields.model_dump(exclude_none=True)
        return self._parse(SharedCardResponse, self._request("PATCH", f"/shared-cards/{card_id}", json=payload))

    def delete_card(self, card_id) -> None:
        self._request("DELETE", f"/shared-cards/{card_id}")

    # Paraphrases

    def fetch_paraphrases(self) -> List[SharedParaphraseResponse]:
        """All shared paraphrases, newest first."""
        return self._parse(_paraphrase_list, self._request("GET", "/paraphrases"))

    def insert_paraphrase(self, draft: ParaphraseDraft) -> SharedParaphraseResponse:
        try:
            payload = SharedParaphraseCreate(original=draft.original, variations=draft.variations).model_dump()
        except PydanticValidationError as e:
            raise RemoteStoreError(f"Paraphrase rejected before upload: {e.error_count()} error(s)") from e
        return self._parse(SharedParaphraseResponse, self._request("POST", "/paraphrases", json=payload))

    def update_paraphrase(self, paraphrase_id, fields: SharedParaphraseUpdate) -> SharedParaphraseResponse:
        payload = fields.model_dump(exclude_none=True)
        return self._parse(
            SharedParaphraseResponse,
            self._request("PATCH", f"/paraphrases/{paraphrase_id}", json=payload),
        )

    def delete_paraphrase(self, paraphrase_id) -> None:
        self._request("DELETE", f"/paraphrases/{paraphrase_id}")
