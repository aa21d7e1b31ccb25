"""
Sync service: reconciles the locally cached collections with the shared store.

The shared (remote) store is authoritative for every identity it holds.
Local-only records are appended after the remote ones in their cached
order; when an id exists on both sides the remote record wins wholesale.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Sequence, TypeVar

from learnflow.schemas.card import Card, DEFAULT_UNIT, SharedCardResponse
from learnflow.schemas.paraphrase import Paraphrase, SharedParaphraseResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", Card, Paraphrase)


def merge_by_id(remote: Sequence[T], local: Sequence[T]) -> List[T]:
    """
    Merge a remote and a local collection by identity, remote wins.

    Args:
        remote: Authoritative records, kept in their given order
        local: Cached records; only those whose id is absent remotely survive

    Returns:
        ``remote`` followed by the local-only records
    """
    remote_ids = {record.id for record in remote}
    local_only = [record for record in local if record.id not in remote_ids]
    if local_only:
        logger.info(f"Merge kept {len(local_only)} local-only record(s) next to {len(remote)} remote")
    return list(remote) + local_only


def card_from_remote(record: SharedCardResponse, now: datetime) -> Card:
    """
    Turn a shared store record into a fresh collection card.

    The shared store holds content only, so the card starts at box 1 with
    no review history.
    """
    return Card(
        id=record.id,
        front=record.front or "",
        back=record.back or "",
        translation=record.translation or "",
        example=record.example or "",
        unit=record.unit or DEFAULT_UNIT,
        created=record.created_at or now,
    )


def cards_from_remote(records: Iterable[SharedCardResponse], now: datetime) -> List[Card]:
    """Map every shared card record into a collection card."""
    return [card_from_remote(record, now) for record in records]


def paraphrase_from_remote(record: SharedParaphraseResponse, now: datetime) -> Paraphrase:
    """Turn a shared store paraphrase into a collection paraphrase."""
    return Paraphrase(
        id=record.id,
        original=record.original or "",
        variations=list(record.variations or []),
        created=record.created_at or now,
    )


def paraphrases_from_remote(records: Iterable[SharedParaphraseResponse], now: datetime) -> List[Paraphrase]:
    """Map every shared paraphrase record into a collection paraphrase."""
    return [paraphrase_from_remote(record, now) for record in records]
