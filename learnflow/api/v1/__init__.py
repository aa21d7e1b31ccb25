"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from learnflow.api.v1.endpoints import shared_cards, paraphrases

api_router = APIRouter()

# Each router defines its own prefix
api_router.include_router(shared_cards.router)
api_router.include_router(paraphrases.router)
