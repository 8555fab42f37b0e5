"""Corpus-wide lexicon aggregation and default stat construction."""

from __future__ import annotations

import math
from typing import List, Mapping

import pandas as pd

from .constants import (
    COUNT,
    DEFINITION,
    DIFFICULTY_LOG_OFFSET,
    EXPLICIT_SCORE,
    FAMILIARITY,
    FIRST_DISCOVERY_PROGRESS,
    IMPLICIT_SCORE,
    LEMMA,
    LEXICON_COLUMNS,
    MASTERY_SCORE,
    MAX_CACHED_OCCURRENCES,
    RELATIVE_DIFFICULTY,
    REVIEW_COUNT,
    TOTAL_OCCURRENCES,
)
from .models import Corpus, CorpusAnalysis, LandscapeStats, LexiconItem, VocabularyStat

StatMap = Mapping[str, VocabularyStat]


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero denominator."""
    if not denominator:
        return 0.0
    return numerator / denominator


def relative_difficulty(count: int) -> float:
    """Per-lemma damping factor: rarer lemmas get a larger factor."""
    return 1.0 / math.log(max(count, 0) + DIFFICULTY_LOG_OFFSET)


def analyze_corpus(corpus: Corpus) -> CorpusAnalysis:
    """Count lemmas and their first positions in one left-to-right pass.

    Positions are 1-based and run across all documents. Tokens whose lemma is
    empty (pure punctuation) are not counted.
    """

    if corpus is None:
        raise ValueError("corpus must not be None")

    analysis = CorpusAnalysis()
    position = 0
    for document in corpus:
        for sentence in document.sentences():
            for token in sentence.tokens:
                lemma = token.lemma
                if not lemma:
                    continue
                position += 1
                if lemma not in analysis.counts:
                    analysis.counts[lemma] = 0
                    analysis.first_positions[lemma] = position
                    analysis.contexts[lemma] = []
                analysis.counts[lemma] += 1
                contexts = analysis.contexts[lemma]
                if len(contexts) < MAX_CACHED_OCCURRENCES and sentence.text not in contexts:
                    contexts.append(sentence.text)
    analysis.total_tokens = position
    return analysis


def get_or_create_stat(
    lemma: str,
    stats: StatMap,
    analysis: CorpusAnalysis | None = None,
    *,
    now: float | None = None,
) -> VocabularyStat:
    """Return the persisted stat for a lemma or synthesize a default one.

    This is the only place default stats are built. A lemma missing from the
    analysis is treated as a single occurrence at the first position.
    """

    existing = stats.get(lemma)
    if existing is not None:
        return existing

    analysis = analysis or CorpusAnalysis()
    count = analysis.counts.get(lemma, 1)
    first_pos = analysis.first_positions.get(lemma, 1)
    return VocabularyStat(
        lemma=lemma,
        total_occurrences=count,
        relative_difficulty=relative_difficulty(count),
        first_discovery_progress=min(1.0, safe_ratio(first_pos, analysis.total_tokens)),
        last_encounter_date=0.0 if now is None else now,
    )


def aggregate_lexicon(
    corpus: Corpus,
    stats: StatMap,
    *,
    analysis: CorpusAnalysis | None = None,
    now: float | None = None,
) -> List[LexiconItem]:
    """Build one LexiconItem per distinct lemma, most frequent first.

    Persisted stats are used as-is so historical mastery survives corpus
    changes; ``count`` always reflects the current corpus. Ties are broken by
    lemma so the order is reproducible.
    """

    if stats is None:
        raise ValueError("stats must not be None")

    analysis = analysis or analyze_corpus(corpus)
    if analysis.total_tokens == 0:
        return []

    items = [
        LexiconItem(
            stat=get_or_create_stat(lemma, stats, analysis, now=now),
            count=count,
            occurrences=tuple(analysis.contexts.get(lemma, ())),
        )
        for lemma, count in analysis.counts.items()
    ]
    items.sort(key=lambda item: (-item.count, item.lemma))
    return items


def landscape_stats(lexicon: List[LexiconItem], total_tokens: int) -> LandscapeStats:
    """Summarize lexical density and remaining difficulty of a corpus.

    ``difficulty_score`` is the token-weighted mean relative difficulty of the
    part of each lemma not yet mastered.
    """

    unique_tokens = len(lexicon)
    weighted = sum(
        item.count * item.stat.relative_difficulty * (1.0 - item.mastery_score)
        for item in lexicon
    )
    return LandscapeStats(
        unique_tokens=unique_tokens,
        total_tokens=total_tokens,
        ttr=safe_ratio(unique_tokens, total_tokens),
        difficulty_score=safe_ratio(weighted, total_tokens),
    )


def lexicon_to_dataframe(lexicon: List[LexiconItem]) -> pd.DataFrame:
    """Tabulate a lexicon with canonical column order."""

    rows = [
        {
            LEMMA: item.lemma,
            COUNT: item.count,
            TOTAL_OCCURRENCES: item.stat.total_occurrences,
            RELATIVE_DIFFICULTY: item.stat.relative_difficulty,
            FIRST_DISCOVERY_PROGRESS: item.first_discovery_progress,
            IMPLICIT_SCORE: item.stat.implicit_score,
            EXPLICIT_SCORE: item.stat.explicit_score,
            MASTERY_SCORE: item.mastery_score,
            FAMILIARITY: int(item.familiarity),
            REVIEW_COUNT: item.review_count,
            DEFINITION: item.definition,
        }
        for item in lexicon
    ]
    return pd.DataFrame(rows, columns=LEXICON_COLUMNS)
