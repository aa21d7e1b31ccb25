"""
Shared paraphrase service: persistence of the authoritative paraphrase records.
"""
import logging
from sqlmodel import Session, select
from typing import List

from learnflow.core.exceptions import NotFoundError
from learnflow.models import SharedParaphrase
from learnflow.schemas.paraphrase import SharedParaphraseCreate, SharedParaphraseUpdate

logger = logging.getLogger(__name__)


def list_shared_paraphrases(session: Session) -> List[SharedParaphrase]:
    """All shared paraphrases, most recent first."""
    query = select(SharedParaphrase).order_by(
        SharedParaphrase.created_at.desc(), SharedParaphrase.id.desc()  # type: ignore
    )
    return list(session.exec(query).all())


def create_shared_paraphrase(session: Session, data: SharedParaphraseCreate) -> SharedParaphrase:
    """Insert a paraphrase (the schema guarantees at least one variation)."""
    paraphrase = SharedParaphrase(original=data.original, variations=list(data.variations))
    session.add(paraphrase)
    session.commit()
    session.refresh(paraphrase)
    logger.info(f"Created shared paraphrase {paraphrase.id}")
    return paraphrase


def update_shared_paraphrase(
    session: Session,
    paraphrase_id: int,
    data: SharedParaphraseUpdate
) -> SharedParaphrase:
    """
    Apply a partial update to a paraphrase.

    Raises:
        NotFoundError: If the paraphrase does not exist
    """
    paraphrase = session.get(SharedParaphrase, paraphrase_id)
    if not paraphrase:
        raise NotFoundError(f"Paraphrase with id {paraphrase_id} not found")

    if data.original is not None:
        paraphrase.original = data.original
    if data.variations is not None:
        # Assign a new list so the JSON column is flagged as modified
        paraphrase.variations = list(data.variations)

    session.add(paraphrase)
    session.commit()
    session.refresh(paraphrase)
    logger.info(f"Updated shared paraphrase {paraphrase_id}")
    return paraphrase


def delete_shared_paraphrase(session: Session, paraphrase_id: int) -> None:
    """
    Delete a paraphrase.

    Raises:
        NotFoundError: If the paraphrase does not exist
    """
    paraphrase = session.get(SharedParaphrase, paraphrase_id)
    if not paraphrase:
        raise NotFoundError(f"Paraphrase with id {paraphrase_id} not found")
    session.delete(paraphrase)
    session.commit()
    logger.info(f"Deleted shared paraphrase {paraphrase_id}")
