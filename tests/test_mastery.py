import math
import random

import pytest

from margin_lexis.constants import (
    DECK_REVIEW_OCCURRENCE_ID,
    EMPHASIS_HIGHLIGHT,
    EMPHASIS_MUTED,
    EMPHASIS_NORMAL,
    KIND_EXPLICIT,
    KIND_IMPLICIT,
    Familiarity,
)
from margin_lexis.mastery import (
    apply_rating,
    clamp,
    emphasis_for,
    next_familiarity,
    record_interaction,
    record_lookup,
    record_sentence_read,
    set_definition,
)
from margin_lexis.models import VocabularyStat, WordOccurrence
from margin_lexis.statistics import analyze_corpus
from margin_lexis.text_processing import build_document


def _stat(lemma="zebra", **kwargs):
    defaults = dict(
        total_occurrences=1,
        relative_difficulty=1 / math.log(2.1),
        first_discovery_progress=0.5,
    )
    defaults.update(kwargs)
    return VocabularyStat(lemma=lemma, **defaults)


def test_clamp():
    assert clamp(-0.5) == 0.0
    assert clamp(1.5) == 1.0
    assert clamp(0.25) == 0.25
    assert clamp(float("nan")) == 0.0


def test_mastery_score_is_weighted_composite():
    stat = _stat(implicit_score=0.25, explicit_score=0.8)

    assert stat.mastery_score == 0.4 * 0.25 + 0.6 * 0.8


def test_explicit_lookup_lowers_explicit_score():
    stats = {"zebra": _stat(explicit_score=0.5)}

    updated, stat = record_interaction(stats, "zebra", KIND_EXPLICIT, -0.1, "zoo-p0-s1-w1", now=100.0)

    assert stat.explicit_score == pytest.approx(0.5 - 0.1 / math.log(2.1))
    assert stat.explicit_score < 0.5
    assert stat.implicit_score == 0.0
    assert updated["zebra"] is stat


def test_explicit_score_never_goes_negative():
    _, stat = record_interaction({"zebra": _stat()}, "zebra", KIND_EXPLICIT, -0.1, "w", now=1.0)

    assert stat.explicit_score == 0.0
    assert stat.mastery_score == 0.0


def test_implicit_score_clamped_at_one():
    _, stat = record_interaction({"zebra": _stat()}, "zebra", KIND_IMPLICIT, 10.0, "w", now=1.0)

    assert stat.implicit_score == 1.0


def test_scores_stay_in_bounds_under_random_interactions():
    rng = random.Random(7)
    stats = {"zebra": _stat()}

    for i in range(200):
        kind = rng.choice([KIND_IMPLICIT, KIND_EXPLICIT])
        stats, stat = record_interaction(stats, "zebra", kind, rng.uniform(-2, 2), f"w{i}", now=float(i))
        assert 0.0 <= stat.implicit_score <= 1.0
        assert 0.0 <= stat.explicit_score <= 1.0
        assert 0.0 <= stat.mastery_score <= 1.0


def test_record_interaction_does_not_mutate_input():
    original = _stat()
    stats = {"zebra": original}

    updated, _ = record_interaction(stats, "zebra", KIND_IMPLICIT, 0.5, "w", now=5.0)

    assert stats["zebra"] is original
    assert updated is not stats
    assert original.interactions == ()


def test_record_interaction_appends_log_entry():
    _, stat = record_interaction({}, "zebra", KIND_IMPLICIT, 0.05, "zoo-p0-s1-w1", now=42.0)

    assert len(stat.interactions) == 1
    interaction = stat.interactions[0]
    assert interaction.occurrence_id == "zoo-p0-s1-w1"
    assert interaction.kind == KIND_IMPLICIT
    assert interaction.weight == 0.05
    assert interaction.timestamp == 42.0
    assert stat.last_encounter_date == 42.0


def test_record_interaction_synthesizes_default_stat():
    analysis = analyze_corpus([build_document("The cat. The zebra.", "zoo")])

    _, stat = record_interaction({}, "zebra", KIND_IMPLICIT, 0.0, "w", analysis=analysis, now=1.0)

    assert stat.total_occurrences == 1
    assert stat.first_discovery_progress == pytest.approx(4 / 4)
    assert stat.familiarity == Familiarity.UNKNOWN


def test_record_interaction_unknown_kind_raises():
    with pytest.raises(ValueError, match="Unknown interaction kind"):
        record_interaction({}, "zebra", "telepathic", 0.1, "w")


@pytest.mark.parametrize("weight", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_weight_counts_as_zero(weight):
    stats = {"zebra": _stat(implicit_score=0.3)}

    _, stat = record_interaction(stats, "zebra", KIND_IMPLICIT, weight, "w", now=1.0)

    assert stat.implicit_score == 0.3
    assert stat.interactions[0].weight == 0.0


def test_record_sentence_read_touches_every_word():
    document = build_document("The zebra ran.", "zoo")
    sentence = next(document.sentences())

    updated = record_sentence_read({}, sentence, now=3.0)

    assert set(updated) == {"the", "zebra", "ran"}
    assert all(stat.implicit_score > 0 for stat in updated.values())
    assert all(stat.explicit_score == 0 for stat in updated.values())
    assert updated["zebra"].interactions[0].occurrence_id == "zoo-p0-s0-w1"


def test_record_sentence_read_skips_empty_lemmas():
    sentence = next(build_document("« Run »", "d").sentences())

    updated = record_sentence_read({}, sentence, now=1.0)

    assert set(updated) == {"run"}


def test_record_lookup_is_negative_explicit_evidence():
    token = WordOccurrence(id="zoo-p0-s0-w1", text="zebra", lemma="zebra")

    _, stat = record_lookup({"zebra": _stat(explicit_score=0.5)}, token, now=1.0)

    assert stat.explicit_score < 0.5
    assert stat.interactions[-1].kind == KIND_EXPLICIT
    assert stat.interactions[-1].weight == -0.1
    assert stat.interactions[-1].occurrence_id == "zoo-p0-s0-w1"


def test_set_definition_keeps_existing():
    stats = {"zebra": _stat(definition="A striped horse.")}

    _, stat = set_definition(stats, "zebra", "Something else.")
    assert stat.definition == "A striped horse."

    _, fresh = set_definition({}, "okapi", "A forest giraffe.")
    assert fresh.definition == "A forest giraffe."


def test_familiarity_ladder_success_saturates():
    level = Familiarity.UNKNOWN
    history = []
    for _ in range(5):
        level = next_familiarity(level, True)
        history.append(level)

    assert history == [
        Familiarity.SEEN,
        Familiarity.FAMILIAR,
        Familiarity.MASTERED,
        Familiarity.MASTERED,
        Familiarity.MASTERED,
    ]


@pytest.mark.parametrize(
    "current,expected",
    [
        (Familiarity.MASTERED, Familiarity.SEEN),
        (Familiarity.FAMILIAR, Familiarity.SEEN),
        (Familiarity.SEEN, Familiarity.SEEN),
        (Familiarity.UNKNOWN, Familiarity.UNKNOWN),
    ],
)
def test_familiarity_ladder_failure(current, expected):
    assert next_familiarity(current, False) == expected


def test_apply_rating_five_successes():
    stats = {}
    for i in range(5):
        stats, stat = apply_rating(stats, "zebra", True, now=float(i))

    assert stat.familiarity == Familiarity.MASTERED
    assert stat.review_count == 5
    assert len(stat.interactions) == 5
    assert all(i.occurrence_id == DECK_REVIEW_OCCURRENCE_ID for i in stat.interactions)
    assert stat.explicit_score == 1.0


def test_apply_rating_failure_from_mastered():
    stats = {"zebra": _stat(familiarity=Familiarity.MASTERED, review_count=3, explicit_score=0.9)}

    _, stat = apply_rating(stats, "zebra", False, now=1.0)

    assert stat.familiarity == Familiarity.SEEN
    assert stat.review_count == 4
    assert stat.explicit_score < 0.9
    assert stat.interactions[-1].weight == -0.5


def test_emphasis_for():
    assert emphasis_for(None) == EMPHASIS_HIGHLIGHT
    assert emphasis_for(_stat()) == EMPHASIS_HIGHLIGHT
    assert emphasis_for(_stat(explicit_score=0.75)) == EMPHASIS_NORMAL
    assert emphasis_for(_stat(implicit_score=1.0, explicit_score=1.0)) == EMPHASIS_MUTED
