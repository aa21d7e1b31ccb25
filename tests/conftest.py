"""
Shared fixtures: fixed clock, seeded random source, in-memory database and
API client, sample collections and fake shared stores.
"""
import random
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from learnflow.core.database import get_session
from learnflow.core.exceptions import RemoteStoreError
from learnflow.main import app
from learnflow.models import SharedCard, SharedParaphrase  # noqa: F401
from learnflow.schemas.card import Card, SharedCardResponse
from learnflow.schemas.paraphrase import Paraphrase, SharedParaphraseResponse
from learnflow.services.cache_service import LocalCache

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    # Not used as a context manager so the startup hook does not touch the real database
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_card(card_id, box=1, unit="General", next_review=None, front=None, back=None, **extra):
    return Card(
        id=card_id,
        front=front or f"front {card_id}",
        back=back or f"back {card_id}",
        unit=unit,
        box=box,
        next_review=next_review,
        created=NOW,
        **extra,
    )


@pytest.fixture
def cards():
    """Five cards over two units; card 4 is not due yet."""
    return [
        make_card(1, box=1, unit="Unit 1"),
        make_card(2, box=2, unit="Unit 1", next_review=NOW - timedelta(hours=1)),
        make_card(3, box=3, unit="Unit 2", next_review=NOW),
        make_card(4, box=4, unit="Unit 2", next_review=NOW + timedelta(days=2)),
        make_card(5, box=5, unit="Unit 1", next_review=NOW - timedelta(days=1)),
    ]


@pytest.fixture
def paraphrases():
    return [
        Paraphrase(id=1, original="It's raining cats and dogs.",
                   variations=["It's pouring.", "It's raining heavily."], created=NOW),
        Paraphrase(id=2, original="Break a leg!", variations=["Good luck!"], created=NOW),
    ]


@pytest.fixture
def cache(tmp_path):
    return LocalCache(tmp_path / "cache.json")


class FakeRemoteStore:
    """In-memory shared store recording the calls it receives."""

    def __init__(self, cards=None, paraphrases=None):
        self.cards = list(cards or [])
        self.paraphrases = list(paraphrases or [])
        self.calls = []
        self._ids = count(1000)

    def fetch_cards(self):
        self.calls.append(("fetch_cards",))
        return list(self.cards)

    def insert_card(self, draft):
        self.calls.append(("insert_card", draft))
        record = SharedCardResponse(id=next(self._ids), created_at=NOW, **draft.model_dump())
        self.cards.append(record)
        return record

    def insert_cards_bulk(self, drafts):
        self.calls.append(("insert_cards_bulk", list(drafts)))
        records = [
            SharedCardResponse(id=next(self._ids), created_at=NOW, **draft.model_dump())
            for draft in drafts
        ]
        self.cards.extend(records)
        return records

    def update_card(self, card_id, fields):
        self.calls.append(("update_card", card_id, fields))

    def delete_card(self, card_id):
        self.calls.append(("delete_card", card_id))

    def fetch_paraphrases(self):
        self.calls.append(("fetch_paraphrases",))
        return list(self.paraphrases)

    def insert_paraphrase(self, draft):
        self.calls.append(("insert_paraphrase", draft))
        record = SharedParaphraseResponse(
            id=next(self._ids), original=draft.original, variations=draft.variations, created_at=NOW
        )
        self.paraphrases.append(record)
        return record

    def update_paraphrase(self, paraphrase_id, fields):
        self.calls.append(("update_paraphrase", paraphrase_id, fields))

    def delete_paraphrase(self, paraphrase_id):
        self.calls.append(("delete_paraphrase", paraphrase_id))


class FailingRemoteStore:
    """Shared store that is never reachable."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise RemoteStoreError(f"{name} failed: connection refused")
        return fail


@pytest.fixture
def fake_remote():
    return FakeRemoteStore()


@pytest.fixture
def failing_remote():
    return FailingRemoteStore()
