"""Engine facade binding the pure vocabulary functions to a stat store.

The engine holds two immutable snapshots, the corpus and the stat map. Every
update replaces the stat map with a new value and writes it to the store;
the lexicon is re-derived lazily and memoized on the identity of both
snapshots.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Sequence, Tuple

from .bands import classify_bands
from .constants import Familiarity
from .landscape import PlotModel, project
from .mastery import (
    apply_rating,
    emphasis_for,
    record_interaction,
    record_lookup,
    record_sentence_read,
    set_definition,
)
from .models import (
    BandedLexiconItem,
    CorpusAnalysis,
    Document,
    LandscapeStats,
    LexiconItem,
    Sentence,
    StudyFilter,
    VocabularyStat,
    WordOccurrence,
)
from .statistics import aggregate_lexicon, analyze_corpus, landscape_stats
from .storage import InMemoryStatStore, StatStore
from .study import StudySession

logger = logging.getLogger(__name__)


class LexisEngine:
    """Vocabulary engine for one reading project.

    Args:
        store: Stat store; read once on construction and rewritten on each update.
        corpus: Documents in reading order.
        rng: Random source for study sessions.
    """

    def __init__(
        self,
        store: StatStore | None = None,
        corpus: Sequence[Document] = (),
        *,
        rng: random.Random | None = None,
    ):
        self.store = store or InMemoryStatStore()
        self._stats: Dict[str, VocabularyStat] = self.store.get()
        self._corpus: Tuple[Document, ...] = tuple(corpus)
        self._rng = rng or random.Random()
        self._analysis_key: object = None
        self._analysis: CorpusAnalysis | None = None
        self._lexicon_key: Tuple[object, object] | None = None
        self._lexicon: List[LexiconItem] = []
        self._banded_key: object = None
        self._banded: List[BandedLexiconItem] = []

    # -- snapshots ---------------------------------------------------------

    @property
    def corpus(self) -> Tuple[Document, ...]:
        return self._corpus

    @property
    def stats(self) -> Dict[str, VocabularyStat]:
        """Current stat map; treat as read-only."""
        return self._stats

    def set_corpus(self, corpus: Sequence[Document]) -> None:
        self._corpus = tuple(corpus)

    def add_document(self, document: Document) -> None:
        self._corpus = self._corpus + (document,)

    def _replace_stats(self, stats: Dict[str, VocabularyStat]) -> None:
        self._stats = stats
        self.store.set(stats)

    # -- derivations -------------------------------------------------------

    def analysis(self) -> CorpusAnalysis:
        if self._analysis is None or self._analysis_key is not self._corpus:
            self._analysis = analyze_corpus(self._corpus)
            self._analysis_key = self._corpus
        return self._analysis

    def lexicon(self) -> List[LexiconItem]:
        """Count-sorted lexicon, recomputed only when corpus or stats changed."""
        key = (self._corpus, self._stats)
        if self._lexicon_key is None or any(a is not b for a, b in zip(self._lexicon_key, key)):
            self._lexicon = aggregate_lexicon(self._corpus, self._stats, analysis=self.analysis())
            self._lexicon_key = key
            logger.debug("Re-derived lexicon with %d entries", len(self._lexicon))
        return self._lexicon

    def banded(self) -> List[BandedLexiconItem]:
        lexicon = self.lexicon()
        if self._banded_key is not lexicon:
            self._banded = classify_bands(lexicon)
            self._banded_key = lexicon
        return self._banded

    def project(self, view: str, simulated_progress: float) -> PlotModel:
        return project(self.lexicon(), view, simulated_progress)

    def landscape_stats(self) -> LandscapeStats:
        return landscape_stats(self.lexicon(), self.analysis().total_tokens)

    def learning_progress(self) -> Dict[str, int]:
        """Stored lemma counts for every familiarity rung, zero-filled."""
        counts = self.store.get_learning_progress()
        return {level.name: counts.get(level.name, 0) for level in Familiarity}

    def emphasis(self, token: WordOccurrence) -> str:
        """Reading emphasis for a token based on its lemma's mastery."""
        return emphasis_for(self._stats.get(token.lemma))

    # -- updates -----------------------------------------------------------

    def record_interaction(
        self, lemma: str, kind: str, weight: float, occurrence_id: str
    ) -> VocabularyStat:
        stats, stat = record_interaction(
            self._stats, lemma, kind, weight, occurrence_id, analysis=self.analysis()
        )
        self._replace_stats(stats)
        return stat

    def record_sentence_read(self, sentence: Sentence) -> None:
        self._replace_stats(record_sentence_read(self._stats, sentence, analysis=self.analysis()))

    def record_lookup(self, token: WordOccurrence) -> VocabularyStat:
        stats, stat = record_lookup(self._stats, token, analysis=self.analysis())
        self._replace_stats(stats)
        return stat

    def set_definition(self, lemma: str, definition: str) -> VocabularyStat:
        stats, stat = set_definition(self._stats, lemma, definition, analysis=self.analysis())
        self._replace_stats(stats)
        return stat

    def rate(self, lemma: str, success: bool) -> VocabularyStat:
        stats, stat = apply_rating(self._stats, lemma, success, analysis=self.analysis())
        self._replace_stats(stats)
        if stat.familiarity == Familiarity.MASTERED:
            logger.debug("Lemma %r reached MASTERED after %d reviews", lemma, stat.review_count)
        return stat

    # -- study -------------------------------------------------------------

    def new_session(self) -> StudySession:
        return StudySession(on_rate=self.rate, on_definition=self.set_definition, rng=self._rng)

    def start_session(self, study_filter: StudyFilter) -> StudySession:
        """Create a session and start it on the current banded lexicon.

        The returned session stays on the dashboard when no card matches.
        """
        session = self.new_session()
        session.start(self.banded(), study_filter)
        return session
