"""Flashcard study sessions over a banded lexicon."""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Sequence

from .bands import filter_by_band
from .constants import (
    DEFINITION_UNAVAILABLE,
    STATUS_ALL,
    STATUS_MASTERED,
    STATUS_NEW,
    STATUS_REVIEW,
    STUDY_QUEUE_LIMIT,
    Familiarity,
)
from .definitions import DefinitionFetcher
from .models import BandedLexiconItem, LexiconItem, StudyFilter, VocabularyStat

logger = logging.getLogger(__name__)

MODE_DASHBOARD = "dashboard"
MODE_STUDY = "study"

RateFn = Callable[[str, bool], VocabularyStat]
DefinitionFn = Callable[[str, str], VocabularyStat]


def matches_status(item: LexiconItem, status: str) -> bool:
    """Check a lexicon item against a study status filter."""

    if status == STATUS_NEW:
        return item.review_count == 0 and item.familiarity <= Familiarity.SEEN
    if status == STATUS_REVIEW:
        return item.review_count > 0 and item.familiarity < Familiarity.MASTERED
    if status == STATUS_MASTERED:
        return item.familiarity == Familiarity.MASTERED
    if status == STATUS_ALL:
        return True
    raise ValueError(f"Unknown study status: {status}")


def select_cards(
    banded: Sequence[BandedLexiconItem],
    study_filter: StudyFilter,
    *,
    rng: random.Random | None = None,
    limit: int = STUDY_QUEUE_LIMIT,
) -> List[LexiconItem]:
    """Filter by band and status, shuffle uniformly and cap the queue."""

    candidates = [
        entry.item
        for entry in filter_by_band(banded, study_filter.band)
        if matches_status(entry.item, study_filter.status)
    ]
    (rng or random.Random()).shuffle(candidates)
    return candidates[:limit]


class StudySession:
    """Dashboard/Study state machine for one flashcard session.

    Ratings and fetched definitions are written through the callbacks, keyed by
    lemma, so results that arrive late still land on the right word.

    Args:
        on_rate: Persists a rating for a lemma and returns the updated stat.
        on_definition: Persists a fetched definition for a lemma.
        rng: Random source for shuffling; seeded in tests.
        limit: Maximum number of cards per session.
    """

    def __init__(
        self,
        on_rate: RateFn,
        on_definition: DefinitionFn,
        *,
        rng: random.Random | None = None,
        limit: int = STUDY_QUEUE_LIMIT,
    ):
        self._on_rate = on_rate
        self._on_definition = on_definition
        self._rng = rng or random.Random()
        self.limit = limit
        self.mode = MODE_DASHBOARD
        self.queue: List[LexiconItem] = []
        self.index = 0
        self.revealed = False
        self._definitions: Dict[str, str] = {}

    @property
    def current(self) -> LexiconItem | None:
        """Card under the cursor, or None outside a session."""
        if self.mode != MODE_STUDY or self.index >= len(self.queue):
            return None
        return self.queue[self.index]

    def start(self, banded: Sequence[BandedLexiconItem], study_filter: StudyFilter) -> List[LexiconItem]:
        """Build the queue and enter Study mode.

        An empty selection is refused: the session stays on the dashboard and
        the empty queue is returned.
        """

        self.queue = select_cards(banded, study_filter, rng=self._rng, limit=self.limit)
        self.index = 0
        self.revealed = False
        if not self.queue:
            logger.info("No cards match filter band=%s status=%s", study_filter.band, study_filter.status)
            self.mode = MODE_DASHBOARD
            return []
        self.mode = MODE_STUDY
        return list(self.queue)

    def reveal(self) -> bool:
        """Flip the current card; returns the new orientation."""
        if self.current is None:
            return False
        self.revealed = not self.revealed
        return self.revealed

    def definition_for(self, item: LexiconItem) -> str | None:
        return item.definition or self._definitions.get(item.lemma)

    async def reveal_definition(self, fetcher: DefinitionFetcher) -> str:
        """Reveal the current card and return its definition.

        Unlike ``reveal()`` this never flips an already revealed card back.
        A missing definition is fetched once per lemma and persisted. If the
        fetch fails the placeholder is returned and nothing is cached, so the
        next reveal retries.
        """

        card = self.current
        if card is None:
            return DEFINITION_UNAVAILABLE
        if not self.revealed:
            self.reveal()
        lemma = card.lemma

        cached = self.definition_for(card)
        if cached:
            return cached

        definition = await fetcher.fetch(lemma)
        if not definition:
            return DEFINITION_UNAVAILABLE

        self._definitions[lemma] = definition
        self._on_definition(lemma, definition)
        return definition

    def rate(self, success: bool) -> VocabularyStat | None:
        """Rate the current card and advance; the last card returns to the dashboard."""

        card = self.current
        if card is None:
            return None
        stat = self._on_rate(card.lemma, success)
        self.advance()
        return stat

    def advance(self) -> None:
        self.index += 1
        self.revealed = False
        if self.index >= len(self.queue):
            self.exit()

    def exit(self) -> None:
        """Leave Study mode."""
        self.mode = MODE_DASHBOARD
        self.queue = []
        self.index = 0
        self.revealed = False
