from pathlib import Path

import pytest

from margin_lexis.constants import EMPHASIS_HIGHLIGHT, EMPHASIS_MUTED, KIND_EXPLICIT, Familiarity
from margin_lexis.engine import LexisEngine
from margin_lexis.models import StudyFilter
from margin_lexis.storage import InMemoryStatStore, JsonStatStore
from margin_lexis.study import MODE_DASHBOARD, MODE_STUDY
from margin_lexis.text_processing import build_document

ZEBRA_TEXT = "The cat saw the dog. The zebra ran. The end of the day."


def _engine(store=None):
    return LexisEngine(store, [build_document(ZEBRA_TEXT, "zoo")])


def test_lexicon_is_memoized_until_stats_change():
    engine = _engine()
    first = engine.lexicon()

    assert engine.lexicon() is first
    assert engine.banded() is engine.banded()

    engine.record_interaction("zebra", KIND_EXPLICIT, 0.5, "zoo-p0-s1-w1")
    second = engine.lexicon()

    assert second is not first
    zebra = next(item for item in second if item.lemma == "zebra")
    assert zebra.mastery_score > 0


def test_lexicon_rederived_after_corpus_change():
    engine = _engine()
    first = engine.lexicon()

    engine.add_document(build_document("A zebra again.", "more"))

    lexicon = {item.lemma: item for item in engine.lexicon()}
    assert engine.lexicon() is not first
    assert lexicon["zebra"].count == 2
    assert engine.analysis().total_tokens == 16


def test_updates_are_written_to_store():
    store = InMemoryStatStore()
    engine = _engine(store)

    engine.record_interaction("zebra", KIND_EXPLICIT, 0.5, "zoo-p0-s1-w1")

    assert "zebra" in store.get()
    assert store.get()["zebra"].explicit_score > 0


def test_previous_snapshot_is_untouched():
    engine = _engine()
    before = engine.stats

    engine.rate("zebra", True)

    assert before == {}
    assert engine.stats["zebra"].review_count == 1


def test_five_successful_ratings_reach_mastered():
    engine = _engine()

    for _ in range(5):
        stat = engine.rate("zebra", True)

    assert stat.familiarity == Familiarity.MASTERED
    assert stat.review_count == 5


def test_failure_after_mastery_drops_to_seen():
    engine = _engine()
    for _ in range(3):
        engine.rate("zebra", True)

    stat = engine.rate("zebra", False)

    assert stat.familiarity == Familiarity.SEEN
    assert stat.review_count == 4


def test_learning_progress_counts_every_rung():
    engine = _engine()
    assert engine.learning_progress() == {"UNKNOWN": 0, "SEEN": 0, "FAMILIAR": 0, "MASTERED": 0}

    engine.rate("zebra", True)

    assert engine.learning_progress() == {"UNKNOWN": 0, "SEEN": 1, "FAMILIAR": 0, "MASTERED": 0}


def test_record_lookup_and_emphasis():
    engine = _engine()
    token = next(build_document(ZEBRA_TEXT, "zoo").occurrences())

    assert engine.emphasis(token) == EMPHASIS_HIGHLIGHT
    stat = engine.record_lookup(token)
    assert stat.interactions[-1].weight == -0.1
    assert engine.emphasis(token) == EMPHASIS_HIGHLIGHT

    for _ in range(3):
        engine.record_interaction("the", "implicit", 5.0, "zoo-p0-s0-w0")
        engine.record_interaction("the", KIND_EXPLICIT, 5.0, "zoo-p0-s0-w0")
    assert engine.emphasis(token) == EMPHASIS_MUTED


def test_record_sentence_read():
    engine = _engine()
    sentence = list(engine.corpus[0].sentences())[1]

    engine.record_sentence_read(sentence)

    assert set(engine.stats) == {"the", "zebra", "ran"}
    assert engine.stats["zebra"].first_discovery_progress == pytest.approx(7 / 13)


def test_set_definition():
    engine = _engine()

    engine.set_definition("zebra", "A striped animal.")
    engine.set_definition("zebra", "Overwritten?")

    assert engine.stats["zebra"].definition == "A striped animal."


def test_start_session_with_empty_selection():
    engine = _engine()
    for lemma in ("the", "cat"):
        engine.rate(lemma, True)

    session = engine.start_session(StudyFilter(band="core", status="new"))

    assert session.mode == MODE_DASHBOARD
    assert session.queue == []


def test_session_ratings_flow_into_engine():
    engine = _engine()
    session = engine.start_session(StudyFilter(band="core"))

    assert session.mode == MODE_STUDY
    lemma = session.current.lemma
    session.rate(True)

    assert engine.stats[lemma].familiarity == Familiarity.SEEN


def test_project_and_landscape_stats():
    engine = _engine()

    plot = engine.project("reality", 1.0)
    stats = engine.landscape_stats()

    assert len(plot.points) == 9
    assert stats.unique_tokens == 9
    assert stats.total_tokens == 13


def test_json_store_persists_across_engines(tmp_path: Path):
    path = tmp_path / "vocabulary.json"
    _engine(JsonStatStore(path)).rate("zebra", True)

    reloaded = _engine(JsonStatStore(path))

    assert reloaded.stats["zebra"].familiarity == Familiarity.SEEN
    zebra = next(item for item in reloaded.lexicon() if item.lemma == "zebra")
    assert zebra.review_count == 1


def test_set_corpus_keeps_stats():
    engine = _engine()
    engine.rate("zebra", True)

    engine.set_corpus([build_document("Zebra zebra okapi.", "safari")])

    lexicon = {item.lemma: item for item in engine.lexicon()}
    assert set(lexicon) == {"zebra", "okapi"}
    assert lexicon["zebra"].count == 2
    assert lexicon["zebra"].review_count == 1
