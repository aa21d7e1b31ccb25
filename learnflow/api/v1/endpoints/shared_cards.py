"""
Shared cards endpoint.

The shared store only keeps card content; Leitner state lives with each
client.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session
from typing import List
from learnflow.core.database import get_session
from learnflow.schemas.card import SharedCardCreate, SharedCardUpdate, SharedCardResponse
from learnflow.services import shared_card_service

router = APIRouter(prefix="/shared-cards", tags=["shared-cards"])


@router.get("", response_model=List[SharedCardResponse])
async def get_shared_cards(session: Session = Depends(get_session)):
    """Get all shared cards. Sorted by created_at descending (most recent first)."""
    cards = shared_card_service.list_shared_cards(session)
    return [SharedCardResponse.model_validate(card) for card in cards]


@router.post("", response_model=SharedCardResponse, status_code=status.HTTP_201_CREATED)
async def create_shared_card(
    request: SharedCardCreate,
    session: Session = Depends(get_session)
):
    """Create a shared card and return it with its assigned id."""
    card = shared_card_service.create_shared_card(session, request)
    return SharedCardResponse.model_validate(card)


@router.post("/bulk", response_model=List[SharedCardResponse], status_code=status.HTTP_201_CREATED)
async def create_shared_cards_bulk(
    request: List[SharedCardCreate],
    session: Session = Depends(get_session)
):
    """Create many shared cards in one transaction (used by import)."""
    cards = shared_card_service.create_shared_cards_bulk(session, request)
    return [SharedCardResponse.model_validate(card) for card in cards]


@router.patch("/{card_id}", response_model=SharedCardResponse)
async def update_shared_card(
    card_id: int,
    request: SharedCardUpdate,
    session: Session = Depends(get_session)
):
    """Update the given fields of a shared card."""
    card = shared_card_service.update_shared_card(session, card_id, request)
    return SharedCardResponse.model_validate(card)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shared_card(
    card_id: int,
    session: Session = Depends(get_session)
):
    """Delete a shared card by ID."""
    shared_card_service.delete_shared_card(session, card_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
