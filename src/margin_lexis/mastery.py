"""Interaction recording and mastery scoring.

Every update returns a new stat map; the map passed in is never mutated, so
callers can swap whole snapshots without coordinating writers.
"""

from __future__ import annotations

import math
import time
from dataclasses import replace
from typing import Dict, Mapping, Tuple

from .constants import (
    DECK_REVIEW_OCCURRENCE_ID,
    DECK_REVIEW_WEIGHT,
    EMPHASIS_HIGHLIGHT,
    EMPHASIS_HIGHLIGHT_BELOW,
    EMPHASIS_MUTED,
    EMPHASIS_NORMAL,
    EMPHASIS_NORMAL_BELOW,
    IMPLICIT_READ_WEIGHT,
    INTERACTION_KINDS,
    KIND_EXPLICIT,
    KIND_IMPLICIT,
    LOOKUP_WEIGHT,
    SCORE_MAX,
    SCORE_MIN,
    Familiarity,
)
from .models import CorpusAnalysis, MemoryInteraction, Sentence, VocabularyStat, WordOccurrence
from .statistics import get_or_create_stat

StatMap = Mapping[str, VocabularyStat]
StatUpdate = Tuple[Dict[str, VocabularyStat], VocabularyStat]


def clamp(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    """Clamp value into [low, high]; NaN collapses to low."""
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def _with_stat(stats: StatMap, stat: VocabularyStat) -> StatUpdate:
    updated = dict(stats)
    updated[stat.lemma] = stat
    return updated, stat


def record_interaction(
    stats: StatMap,
    lemma: str,
    kind: str,
    weight: float,
    occurrence_id: str,
    *,
    analysis: CorpusAnalysis | None = None,
    now: float | None = None,
) -> StatUpdate:
    """Record one interaction with a lemma and rescore it.

    Implicit weights model passive reading exposure; explicit weights model
    deliberate actions and may be negative (a lookup signals not knowing the
    word). Each delta is scaled by the lemma's relative difficulty and the
    touched accumulator is clamped to [0, 1].

    Args:
        stats: Current stat map (left untouched).
        lemma: Lemma to update; a default stat is synthesized if absent.
        kind: "implicit" or "explicit".
        weight: Signed evidence weight; non-finite weights count as 0.
        occurrence_id: Occurrence (or pseudo-id such as "deck-review") behind the event.
        analysis: Corpus analysis used when a default stat must be synthesized.
        now: Timestamp override, defaults to ``time.time()``.

    Returns:
        Tuple of (new stat map, updated stat).

    Raises:
        ValueError: If kind is unknown.
    """

    if kind not in INTERACTION_KINDS:
        raise ValueError(f"Unknown interaction kind: {kind}. Available: {list(INTERACTION_KINDS)}")

    now = time.time() if now is None else now
    weight = float(weight) if math.isfinite(weight) else 0.0
    current = get_or_create_stat(lemma, stats, analysis, now=now)
    delta = weight * current.relative_difficulty

    implicit_score = current.implicit_score
    explicit_score = current.explicit_score
    if kind == KIND_IMPLICIT:
        implicit_score = clamp(implicit_score + delta)
    else:
        explicit_score = clamp(explicit_score + delta)

    interaction = MemoryInteraction(
        timestamp=now, occurrence_id=occurrence_id, kind=kind, weight=weight
    )
    stat = replace(
        current,
        implicit_score=implicit_score,
        explicit_score=explicit_score,
        interactions=current.interactions + (interaction,),
        last_encounter_date=now,
    )
    return _with_stat(stats, stat)


def record_sentence_read(
    stats: StatMap,
    sentence: Sentence,
    *,
    weight: float = IMPLICIT_READ_WEIGHT,
    analysis: CorpusAnalysis | None = None,
    now: float | None = None,
) -> Dict[str, VocabularyStat]:
    """Record implicit exposure for every word of a sentence the reader focused."""

    updated: Dict[str, VocabularyStat] = dict(stats)
    for token in sentence.tokens:
        if not token.lemma:
            continue
        updated, _ = record_interaction(
            updated, token.lemma, KIND_IMPLICIT, weight, token.id, analysis=analysis, now=now
        )
    return updated


def record_lookup(
    stats: StatMap,
    token: WordOccurrence,
    *,
    analysis: CorpusAnalysis | None = None,
    now: float | None = None,
) -> StatUpdate:
    """Record that the reader looked a word up, which lowers explicit evidence."""
    return record_interaction(
        stats, token.lemma, KIND_EXPLICIT, LOOKUP_WEIGHT, token.id, analysis=analysis, now=now
    )


def set_definition(
    stats: StatMap,
    lemma: str,
    definition: str,
    *,
    analysis: CorpusAnalysis | None = None,
) -> StatUpdate:
    """Cache a definition on a lemma's stat; an existing definition is kept."""

    current = get_or_create_stat(lemma, stats, analysis)
    if current.definition:
        return _with_stat(stats, current)
    return _with_stat(stats, replace(current, definition=definition))


def next_familiarity(current: Familiarity, success: bool) -> Familiarity:
    """Advance the flashcard ladder.

    Success climbs one rung and saturates at MASTERED. Failure drops anything
    above SEEN down to SEEN, so a mastered word falls two rungs.
    """

    if success:
        return Familiarity(min(int(current) + 1, int(Familiarity.MASTERED)))
    return Familiarity(min(int(current), int(Familiarity.SEEN)))


def apply_rating(
    stats: StatMap,
    lemma: str,
    success: bool,
    *,
    analysis: CorpusAnalysis | None = None,
    now: float | None = None,
) -> StatUpdate:
    """Apply a flashcard outcome: ladder step, review count and explicit evidence."""

    weight = DECK_REVIEW_WEIGHT if success else -DECK_REVIEW_WEIGHT
    updated, stat = record_interaction(
        stats,
        lemma,
        KIND_EXPLICIT,
        weight,
        DECK_REVIEW_OCCURRENCE_ID,
        analysis=analysis,
        now=now,
    )
    stat = replace(
        stat,
        familiarity=next_familiarity(stat.familiarity, success),
        review_count=stat.review_count + 1,
    )
    updated[lemma] = stat
    return updated, stat


def emphasis_for(stat: VocabularyStat | None) -> str:
    """Reading emphasis for a word: unknown words stand out, mastered ones recede."""

    if stat is None or stat.mastery_score < EMPHASIS_HIGHLIGHT_BELOW:
        return EMPHASIS_HIGHLIGHT
    if stat.mastery_score < EMPHASIS_NORMAL_BELOW:
        return EMPHASIS_NORMAL
    return EMPHASIS_MUTED
