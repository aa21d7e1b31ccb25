"""
Study controller: the single owner of the application state.

UI events (review, create, import, test, paraphrase practice) go through
this controller. It keeps the collections in memory, mirrors them into the
local cache after every mutation and forwards writes to the shared store on
a best-effort basis: local state is never rolled back when the shared store
fails, a dismissible warning is recorded instead.
"""
import logging
import random
from typing import Callable, List, Optional, Sequence, TypeVar, Union

from learnflow.core.config import Settings, settings as default_settings
from learnflow.core.exceptions import NotFoundError, RemoteStoreError, ValidationError
from learnflow.schemas.card import Card, CardDraft, CardId, CollectionStats, SharedCardUpdate
from learnflow.schemas.paraphrase import Paraphrase, ParaphraseDraft, ParaphraseId, SharedParaphraseUpdate
from learnflow.schemas.session import (
    AppState,
    ParaphraseMode,
    ParaphraseTestSession,
    QueueEntry,
    Score,
    SyncWarning,
    TestSession,
    TestType,
)
from learnflow.schemas.transfer import CardFormat, ExportFile
from learnflow.services import paraphrase_service, queue_service, srs_service, test_service
from learnflow.services.cache_service import LocalCache
from learnflow.services.remote_store import RemoteStore
from learnflow.services.stats_service import calculate_stats
from learnflow.services.sync_service import (
    card_from_remote,
    cards_from_remote,
    merge_by_id,
    paraphrase_from_remote,
    paraphrases_from_remote,
)
from learnflow.services.transfer_service import export_cards, parse_import
from learnflow.utils.time_utils import Clock, local_ids, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StudyController:
    """
    Holds the collections and sessions for one user and applies every operation.

    Usage:
        controller = StudyController()
        controller.load()                # cache + shared store, remote wins
        controller.rate_current(True)    # review the card under the cursor
        controller.start_test(units=["Unit 1"], test_type=TestType.WRITTEN)

    For testing, inject a fake remote, a cache in tmp_path, a fixed clock and
    a seeded random.Random.
    """

    def __init__(
        self,
        remote=None,
        cache: Optional[LocalCache] = None,
        clock: Clock = utc_now,
        rng: Optional[random.Random] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or default_settings
        self.remote = remote if remote is not None else RemoteStore()
        self.cache = cache if cache is not None else LocalCache(self.config.cache_path)
        self.clock = clock
        self.rng = rng or random.Random()
        self.state = AppState()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _warn(self, message: str) -> None:
        self.state.warnings.append(SyncWarning(message=message, created=self.clock()))

    def _remote_write(self, action: str, call: Callable[[], T], warning: str) -> Optional[T]:
        """
        Run one shared store call after the local change has been decided.

        Args:
            action: Short description for the log
            call: Zero-argument callable doing the remote work
            warning: User-facing message recorded when the call fails

        Returns:
            The call's result, or None when the shared store failed
        """
        try:
            return call()
        except RemoteStoreError as e:
            logger.warning(f"Error {action} in shared store, keeping local state: {e}")
            self._warn(warning)
            return None

    def _persist(self) -> None:
        try:
            self.cache.save_cards(self.state.cards)
            self.cache.save_paraphrases(self.state.paraphrases)
        except OSError as e:
            logger.error(f"Could not write local cache {self.cache.path}: {e}")

    def _rebuild_queue(self) -> None:
        self.state.queue = queue_service.build_study_queue(self.state.cards, self.clock(), self.rng)

    def _set_cards(self, cards: List[Card]) -> None:
        self.state.cards = cards
        self._rebuild_queue()
        self._persist()

    def _set_paraphrases(self, paraphrases: List[Paraphrase]) -> None:
        self.state.paraphrases = paraphrases
        self._persist()

    def _clean_card_draft(self, draft: CardDraft) -> CardDraft:
        front = draft.front.strip()
        back = draft.back.strip()
        if not front or not back:
            raise ValidationError("Front and back are required")
        return CardDraft(
            front=front,
            back=back,
            translation=draft.translation.strip(),
            example=draft.example.strip(),
            unit=draft.unit.strip() or self.config.default_unit,
        )

    def _find_card_index(self, card_id: CardId) -> int:
        for index, card in enumerate(self.state.cards):
            if card.id == card_id:
                return index
        raise NotFoundError(f"Card with id {card_id} not found")

    def _find_paraphrase_index(self, paraphrase_id: ParaphraseId) -> int:
        for index, paraphrase in enumerate(self.state.paraphrases):
            if paraphrase.id == paraphrase_id:
                return index
        raise NotFoundError(f"Paraphrase with id {paraphrase_id} not found")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> AppState:
        """
        Combine the local cache with the shared store once at startup.

        Cached collections are used as they are when the shared store is
        unreachable; otherwise shared records win by id and local-only
        records are appended.
        """
        now = self.clock()
        self.state.cards = self.cache.load_cards()
        self.state.paraphrases = self.cache.load_paraphrases()
        self._rebuild_queue()

        try:
            remote_cards = self.remote.fetch_cards()
            if remote_cards:
                self.state.cards = merge_by_id(cards_from_remote(remote_cards, now), self.state.cards)
                self._rebuild_queue()

            remote_paraphrases = self.remote.fetch_paraphrases()
            if remote_paraphrases:
                self.state.paraphrases = merge_by_id(
                    paraphrases_from_remote(remote_paraphrases, now), self.state.paraphrases
                )
        except RemoteStoreError as e:
            logger.warning(f"Error loading data from shared store: {e}")
            self._warn("Could not load data from database.")

        self._persist()
        logger.info(
            f"Loaded {len(self.state.cards)} card(s) and {len(self.state.paraphrases)} paraphrase(s)"
        )
        return self.state

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def add_card(self, draft: CardDraft) -> Card:
        """
        Create a card at box 1.

        Raises:
            ValidationError: If front or back is empty
        """
        base = self._clean_card_draft(draft)
        now = self.clock()

        saved = self._remote_write(
            "saving card",
            lambda: self.remote.insert_card(base),
            "Could not save card to database. Saved locally instead.",
        )
        if saved is not None:
            card = card_from_remote(saved, now)
        else:
            [new_id] = local_ids(now, (c.id for c in self.state.cards))
            card = Card(id=new_id, **base.model_dump(), created=now)

        self._set_cards(self.state.cards + [card])
        return card

    def update_card(self, card_id: CardId, draft: CardDraft) -> Card:
        """
        Edit the text of a card; its Leitner state is kept.

        The unit only changes when the draft names one; an empty unit keeps
        the card's current unit.

        Raises:
            ValidationError: If front or back is empty
            NotFoundError: If no card has this id
        """
        base = self._clean_card_draft(draft)
        index = self._find_card_index(card_id)
        unit = draft.unit.strip() or None

        changes = {
            "front": base.front,
            "back": base.back,
            "example": base.example,
            "translation": base.translation,
        }
        if unit:
            changes["unit"] = unit
        updated = self.state.cards[index].model_copy(update=changes)
        cards = list(self.state.cards)
        cards[index] = updated
        self.state.cards = cards
        # Edits keep the current queue order
        for entry in self.state.queue.entries:
            if entry.card.id == card_id:
                entry.card = updated
        self._persist()

        self._remote_write(
            "updating card",
            lambda: self.remote.update_card(card_id, SharedCardUpdate(
                front=base.front,
                back=base.back,
                example=base.example,
                translation=base.translation,
                unit=unit,
            )),
            "Could not update card in database.",
        )
        return updated

    def delete_card(self, card_id: CardId) -> None:
        """Remove a card locally, then from the shared store."""
        self._set_cards([c for c in self.state.cards if c.id != card_id])
        self._remote_write(
            "deleting card",
            lambda: self.remote.delete_card(card_id),
            "Could not delete card from database.",
        )

    def import_cards(self, text: str, format: Union[str, CardFormat]) -> List[Card]:
        """
        Import pasted cards and append them to the collection.

        Raises:
            ValidationError: If nothing could be parsed (collection unchanged)
        """
        drafts = parse_import(text, format)
        now = self.clock()

        saved = self._remote_write(
            "importing cards",
            lambda: self.remote.insert_cards_bulk(drafts),
            "Could not import cards to database. Imported locally instead.",
        )
        if saved is not None:
            imported = cards_from_remote(saved, now)
        else:
            ids = local_ids(now, (c.id for c in self.state.cards), count=len(drafts))
            imported = [
                Card(id=new_id, **draft.model_dump(), created=now)
                for new_id, draft in zip(ids, drafts)
            ]

        self._set_cards(self.state.cards + imported)
        logger.info(f"Imported {len(imported)} card(s)")
        return imported

    def reset_progress(self) -> None:
        """Put every card back into box 1 with no review history."""
        self._set_cards(srs_service.reset_progress(self.state.cards))

    # ------------------------------------------------------------------
    # Reviewing
    # ------------------------------------------------------------------

    def current_card(self) -> Optional[Card]:
        entry: Optional[QueueEntry] = self.state.queue.current()
        return entry.card if entry else None

    def rate_current(self, correct: bool) -> Optional[Card]:
        """
        Rate the card under the queue cursor and drop it from the queue.

        Returns:
            The rated card, or None when the queue is empty
        """
        entry = self.state.queue.current()
        if entry is None:
            return None

        rated = None
        cards = list(self.state.cards)
        for index, card in enumerate(cards):
            if card.id == entry.card.id:
                rated = srs_service.rate_card(card, correct, self.clock())
                cards[index] = rated
                break

        self.state.cards = cards
        self.state.queue = queue_service.remove_current(self.state.queue)
        self._persist()
        return rated

    def reshuffle(self) -> None:
        """Shuffle the current queue again and restart at its first card."""
        self.state.queue = queue_service.reshuffle_queue(self.state.queue, self.rng)

    # ------------------------------------------------------------------
    # Tests
    # ------------------------------------------------------------------

    def start_test(
        self,
        units: Optional[Sequence[str]] = None,
        test_type: TestType = TestType.WRITTEN,
        whole_unit: bool = False,
    ) -> TestSession:
        """
        Start a quiz, discarding any previous test session.

        Raises:
            ValidationError: No cards / no cards in the units / too few for multiple choice
        """
        cap = self.config.unit_test_size if whole_unit else self.config.test_size
        session = test_service.start_test(self.state.cards, units, cap, TestType(test_type), self.rng)
        self.state.test = session
        return session

    def answer_test(self, answer: str) -> TestSession:
        if self.state.test is None:
            raise ValidationError("No test in progress")
        self.state.test = test_service.answer_question(self.state.test, answer, self.rng)
        return self.state.test

    def test_score(self) -> Score:
        if self.state.test is None:
            raise ValidationError("No test in progress")
        return test_service.score_test_session(self.state.test)

    def reset_test(self) -> None:
        self.state.test = None

    # ------------------------------------------------------------------
    # Paraphrases
    # ------------------------------------------------------------------

    def add_paraphrase(self, draft: ParaphraseDraft) -> Paraphrase:
        """
        Store a paraphrase with its non-empty variations.

        Raises:
            ValidationError: If the original is empty or no variation is given
        """
        original, variations = paraphrase_service.validate_paraphrase_draft(draft)
        clean = ParaphraseDraft(original=original, variations=variations)
        now = self.clock()

        saved = self._remote_write(
            "saving paraphrase",
            lambda: self.remote.insert_paraphrase(clean),
            "Could not save paraphrase to database. Saved locally instead.",
        )
        if saved is not None:
            paraphrase = paraphrase_from_remote(saved, now)
        else:
            [new_id] = local_ids(now, (p.id for p in self.state.paraphrases))
            paraphrase = Paraphrase(id=new_id, original=original, variations=variations, created=now)

        self._set_paraphrases(self.state.paraphrases + [paraphrase])
        return paraphrase

    def update_paraphrase(self, paraphrase_id: ParaphraseId, draft: ParaphraseDraft) -> Paraphrase:
        """
        Replace the text of a paraphrase.

        Raises:
            ValidationError: If the original is empty or no variation is left
            NotFoundError: If no paraphrase has this id
        """
        original, variations = paraphrase_service.validate_paraphrase_draft(draft)
        index = self._find_paraphrase_index(paraphrase_id)

        updated = self.state.paraphrases[index].model_copy(
            update={"original": original, "variations": variations}
        )
        paraphrases = list(self.state.paraphrases)
        paraphrases[index] = updated
        self._set_paraphrases(paraphrases)

        self._remote_write(
            "updating paraphrase",
            lambda: self.remote.update_paraphrase(
                paraphrase_id, SharedParaphraseUpdate(original=original, variations=variations)
            ),
            "Could not update paraphrase in database.",
        )
        return updated

    def delete_paraphrase(self, paraphrase_id: ParaphraseId) -> None:
        self._set_paraphrases([p for p in self.state.paraphrases if p.id != paraphrase_id])
        self._remote_write(
            "deleting paraphrase",
            lambda: self.remote.delete_paraphrase(paraphrase_id),
            "Could not delete paraphrase from database.",
        )

    def start_paraphrase_test(
        self,
        mode: Union[str, ParaphraseMode] = ParaphraseMode.RECALL_VARIATIONS,
    ) -> ParaphraseTestSession:
        session = paraphrase_service.start_paraphrase_test(
            self.state.paraphrases,
            ParaphraseMode(mode),
            self.rng,
            count_cap=self.config.paraphrase_test_size,
        )
        self.state.paraphrase_test = session
        return session

    def answer_paraphrase(self, answer: str) -> ParaphraseTestSession:
        if self.state.paraphrase_test is None:
            raise ValidationError("No paraphrase test in progress")
        self.state.paraphrase_test = paraphrase_service.answer_paraphrase_question(
            self.state.paraphrase_test, answer
        )
        return self.state.paraphrase_test

    def paraphrase_score(self) -> Score:
        if self.state.paraphrase_test is None:
            raise ValidationError("No paraphrase test in progress")
        return paraphrase_service.paraphrase_score(self.state.paraphrase_test)

    def reset_paraphrase_test(self) -> None:
        self.state.paraphrase_test = None

    # ------------------------------------------------------------------
    # Read-only helpers
    # ------------------------------------------------------------------

    def stats(self) -> CollectionStats:
        return calculate_stats(self.state.cards)

    def units(self) -> List[str]:
        return test_service.get_unique_units(self.state.cards)

    def export(self, format: Union[str, CardFormat]) -> ExportFile:
        return export_cards(self.state.cards, format)

    def dismiss_warning(self, index: int) -> None:
        if 0 <= index < len(self.state.warnings):
            del self.state.warnings[index]

    def clear_warnings(self) -> None:
        self.state.warnings = []
