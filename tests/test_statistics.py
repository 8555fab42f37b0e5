import math

import pytest

from margin_lexis.constants import LEXICON_COLUMNS
from margin_lexis.models import CorpusAnalysis, VocabularyStat
from margin_lexis.statistics import (
    aggregate_lexicon,
    analyze_corpus,
    get_or_create_stat,
    landscape_stats,
    lexicon_to_dataframe,
    relative_difficulty,
    safe_ratio,
)
from margin_lexis.text_processing import build_document

# 13 counted tokens: "the" x5, "zebra" once at position 7
ZEBRA_TEXT = "The cat saw the dog. The zebra ran. The end of the day."


def _zebra_corpus():
    return [build_document(ZEBRA_TEXT, "zoo")]


def test_analyze_corpus_counts_and_first_positions():
    analysis = analyze_corpus(_zebra_corpus())

    assert analysis.total_tokens == 13
    assert analysis.counts["the"] == 5
    assert analysis.counts["zebra"] == 1
    assert analysis.first_positions["the"] == 1
    assert analysis.first_positions["zebra"] == 7


def test_analyze_corpus_positions_run_across_documents():
    corpus = [build_document("a b", "one"), build_document("c a", "two")]

    analysis = analyze_corpus(corpus)

    assert analysis.total_tokens == 4
    assert analysis.first_positions == {"a": 1, "b": 2, "c": 3}
    assert analysis.counts["a"] == 2


def test_analyze_corpus_skips_empty_lemmas():
    analysis = analyze_corpus([build_document("word — « » word", "d")])

    assert "" not in analysis.counts
    # "—" is not in the strip set and stays a lemma
    assert analysis.counts == {"word": 2, "—": 1}
    assert analysis.total_tokens == 3


def test_analyze_corpus_caps_contexts():
    text = "Go now. Go later. Go again. Go home."
    analysis = analyze_corpus([build_document(text, "d")])

    assert analysis.contexts["go"] == ["Go now.", "Go later.", "Go again."]


def test_relative_difficulty_rare_words_weigh_more():
    analysis = analyze_corpus(_zebra_corpus())
    lexicon = {item.lemma: item for item in aggregate_lexicon(_zebra_corpus(), {}, analysis=analysis)}

    assert lexicon["zebra"].stat.relative_difficulty > lexicon["the"].stat.relative_difficulty
    assert lexicon["zebra"].stat.relative_difficulty == pytest.approx(1 / math.log(2.1))
    assert relative_difficulty(0) == pytest.approx(1 / math.log(1.1))


def test_aggregate_lexicon_sorted_by_count_then_lemma():
    lexicon = aggregate_lexicon(_zebra_corpus(), {})

    assert lexicon[0].lemma == "the"
    assert lexicon[0].count == 5
    assert [item.lemma for item in lexicon[1:]] == [
        "cat",
        "day",
        "dog",
        "end",
        "of",
        "ran",
        "saw",
        "zebra",
    ]


def test_aggregate_lexicon_default_stat_fields():
    lexicon = {item.lemma: item for item in aggregate_lexicon(_zebra_corpus(), {})}
    zebra = lexicon["zebra"]

    assert zebra.stat.total_occurrences == 1
    assert zebra.first_discovery_progress == pytest.approx(7 / 13)
    assert zebra.mastery_score == 0.0
    assert zebra.review_count == 0
    assert zebra.occurrences == ("The zebra ran.",)


def test_aggregate_lexicon_preserves_persisted_stats():
    persisted = VocabularyStat(
        lemma="zebra",
        total_occurrences=99,
        relative_difficulty=0.2,
        first_discovery_progress=0.01,
        explicit_score=0.5,
    )

    lexicon = {item.lemma: item for item in aggregate_lexicon(_zebra_corpus(), {"zebra": persisted})}

    assert lexicon["zebra"].stat is persisted
    assert lexicon["zebra"].count == 1
    assert lexicon["zebra"].mastery_score == pytest.approx(0.3)


def test_aggregate_lexicon_ignores_stats_for_absent_lemmas():
    persisted = VocabularyStat("unicorn", 1, 1.0, 0.5)

    lexicon = aggregate_lexicon(_zebra_corpus(), {"unicorn": persisted})

    assert "unicorn" not in {item.lemma for item in lexicon}


def test_aggregate_lexicon_is_idempotent():
    corpus = _zebra_corpus()
    stats = {"the": VocabularyStat("the", 5, 0.5, 0.0, implicit_score=0.2)}

    assert aggregate_lexicon(corpus, stats) == aggregate_lexicon(corpus, stats)


def test_aggregate_lexicon_empty_corpus():
    assert aggregate_lexicon([], {}) == []
    assert aggregate_lexicon([build_document("", "blank")], {}) == []


def test_aggregate_lexicon_none_stats_raises():
    with pytest.raises(ValueError):
        aggregate_lexicon(_zebra_corpus(), None)


def test_get_or_create_stat_guards_zero_tokens():
    stat = get_or_create_stat("ghost", {}, CorpusAnalysis())

    assert stat.first_discovery_progress == 0.0
    assert stat.total_occurrences == 1
    assert math.isfinite(stat.relative_difficulty)


def test_get_or_create_stat_returns_existing():
    existing = VocabularyStat("cat", 3, 0.7, 0.1)

    assert get_or_create_stat("cat", {"cat": existing}) is existing


def test_safe_ratio():
    assert safe_ratio(1, 0) == 0.0
    assert safe_ratio(1, 4) == 0.25


def test_landscape_stats():
    corpus = _zebra_corpus()
    lexicon = aggregate_lexicon(corpus, {})

    stats = landscape_stats(lexicon, 13)

    assert stats.unique_tokens == 9
    assert stats.total_tokens == 13
    assert stats.ttr == pytest.approx(9 / 13)
    assert stats.difficulty_score > 0


def test_landscape_stats_empty():
    stats = landscape_stats([], 0)

    assert stats.ttr == 0.0
    assert stats.difficulty_score == 0.0


def test_lexicon_to_dataframe_columns():
    df = lexicon_to_dataframe(aggregate_lexicon(_zebra_corpus(), {}))

    assert list(df.columns) == LEXICON_COLUMNS
    assert df.loc[0, "lemma"] == "the"
    assert df.loc[0, "count"] == 5
