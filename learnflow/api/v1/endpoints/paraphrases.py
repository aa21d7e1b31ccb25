"""
Paraphrases endpoint.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session
from typing import List
from learnflow.core.database import get_session
from learnflow.schemas.paraphrase import (
    SharedParaphraseCreate,
    SharedParaphraseUpdate,
    SharedParaphraseResponse
)
from learnflow.services import shared_paraphrase_service

router = APIRouter(prefix="/paraphrases", tags=["paraphrases"])


@router.get("", response_model=List[SharedParaphraseResponse])
async def get_paraphrases(session: Session = Depends(get_session)):
    """Get all paraphrases, most recent first."""
    paraphrases = shared_paraphrase_service.list_shared_paraphrases(session)
    return [SharedParaphraseResponse.model_validate(p) for p in paraphrases]


@router.post("", response_model=SharedParaphraseResponse, status_code=status.HTTP_201_CREATED)
async def create_paraphrase(
    request: SharedParaphraseCreate,
    session: Session = Depends(get_session)
):
    paraphrase = shared_paraphrase_service.create_shared_paraphrase(session, request)
    return SharedParaphraseResponse.model_validate(paraphrase)


@router.patch("/{paraphrase_id}", response_model=SharedParaphraseResponse)
async def update_paraphrase(
    paraphrase_id: int,
    request: SharedParaphraseUpdate,
    session: Session = Depends(get_session)
):
    paraphrase = shared_paraphrase_service.update_shared_paraphrase(session, paraphrase_id, request)
    return SharedParaphraseResponse.model_validate(paraphrase)


@router.delete("/{paraphrase_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_paraphrase(
    paraphrase_id: int,
    session: Session = Depends(get_session)
):
    shared_paraphrase_service.delete_shared_paraphrase(session, paraphrase_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
