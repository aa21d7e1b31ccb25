"""
Shared card service: persistence of the authoritative card records.
"""
import logging
from sqlmodel import Session, select
from typing import List

from learnflow.core.exceptions import NotFoundError
from learnflow.models import SharedCard
from learnflow.schemas.card import SharedCardCreate, SharedCardUpdate

logger = logging.getLogger(__name__)


def list_shared_cards(session: Session) -> List[SharedCard]:
    """All shared cards, most recent first."""
    query = select(SharedCard).order_by(SharedCard.created_at.desc(), SharedCard.id.desc())  # type: ignore
    return list(session.exec(query).all())


def create_shared_card(session: Session, data: SharedCardCreate) -> SharedCard:
    """Insert one shared card and return the stored record."""
    card = SharedCard(**data.model_dump())
    session.add(card)
    session.commit()
    session.refresh(card)
    logger.info(f"Created shared card {card.id}")
    return card


def create_shared_cards_bulk(session: Session, data: List[SharedCardCreate]) -> List[SharedCard]:
    """
    Insert many shared cards in one transaction.

    Args:
        session: Database session
        data: Validated card payloads (may be empty)

    Returns:
        Stored records in input order; empty input gives an empty list
    """
    if not data:
        return []
    cards = [SharedCard(**item.model_dump()) for item in data]
    session.add_all(cards)
    session.commit()
    for card in cards:
        session.refresh(card)
    logger.info(f"Bulk created {len(cards)} shared card(s)")
    return cards


def update_shared_card(session: Session, card_id: int, data: SharedCardUpdate) -> SharedCard:
    """
    Apply a partial update to a shared card.

    Raises:
        NotFoundError: If the card does not exist
    """
    card = session.get(SharedCard, card_id)
    if not card:
        raise NotFoundError(f"Shared card with id {card_id} not found")

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(card, field, value)

    session.add(card)
    session.commit()
    session.refresh(card)
    logger.info(f"Updated shared card {card_id}")
    return card


def delete_shared_card(session: Session, card_id: int) -> None:
    """
    Delete a shared card.

    Raises:
        NotFoundError: If the card does not exist
    """
    card = session.get(SharedCard, card_id)
    if not card:
        raise NotFoundError(f"Shared card with id {card_id} not found")
    session.delete(card)
    session.commit()
    logger.info(f"Deleted shared card {card_id}")
