"""Data models for the vocabulary engine.

This module defines dataclasses for:
- WordOccurrence / Sentence / Paragraph / Document: the tokenized corpus
- MemoryInteraction: one recorded encounter with a lemma
- VocabularyStat: the persisted acquisition state of a lemma
- LexiconItem / BandedLexiconItem: per-render projections of the stat table
- StudyFilter: flashcard session selection criteria
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from margin_lexis.constants import (
    BAND_ALL,
    BANDS,
    EXPLICIT_WEIGHT,
    IMPLICIT_WEIGHT,
    INTERACTION_KINDS,
    POS_UNKNOWN,
    STATUS_ALL,
    STUDY_STATUSES,
    Familiarity,
)


@dataclass(frozen=True)
class WordOccurrence:
    """One physical appearance of a word in the corpus.

    Attributes:
        id: Position-derived identifier, e.g. "book-p0-s1-w3"
        text: Surface form as written
        lemma: Lowercased form with punctuation stripped
        pos: Part-of-speech placeholder
    """

    id: str
    text: str
    lemma: str
    pos: str = POS_UNKNOWN


@dataclass(frozen=True)
class Sentence:
    id: str
    text: str
    tokens: tuple[WordOccurrence, ...]


@dataclass(frozen=True)
class Paragraph:
    id: str
    type: str
    sentences: tuple[Sentence, ...]


@dataclass(frozen=True)
class Document:
    """One book or article of the reading corpus."""

    id: str
    title: str
    paragraphs: tuple[Paragraph, ...]

    def sentences(self) -> Iterator[Sentence]:
        """Yield sentences in reading order."""
        for paragraph in self.paragraphs:
            yield from paragraph.sentences

    def occurrences(self) -> Iterator[WordOccurrence]:
        """Yield word occurrences in reading order."""
        for sentence in self.sentences():
            yield from sentence.tokens


Corpus = Sequence[Document]


@dataclass(frozen=True)
class MemoryInteraction:
    """A single implicit or explicit encounter with a lemma."""

    timestamp: float
    occurrence_id: str
    kind: str
    weight: float

    def __post_init__(self) -> None:
        if self.kind not in INTERACTION_KINDS:
            raise ValueError(f"Unknown interaction kind: {self.kind}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "timestamp": self.timestamp,
            "occurrence_id": self.occurrence_id,
            "kind": self.kind,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "MemoryInteraction":
        """Deserialize from dictionary."""
        return cls(
            timestamp=float(d["timestamp"]),
            occurrence_id=str(d["occurrence_id"]),
            kind=d["kind"],
            weight=float(d["weight"]),
        )


@dataclass(frozen=True)
class VocabularyStat:
    """Durable acquisition state of one lemma.

    Attributes:
        lemma: Aggregation key
        total_occurrences: Corpus occurrences when the stat was first computed
        relative_difficulty: Damping factor 1 / ln(occurrences + 1.1)
        first_discovery_progress: Position of first occurrence in [0, 1]
        implicit_score: Accumulated passive exposure in [0, 1]
        explicit_score: Accumulated active evidence in [0, 1]
        familiarity: Flashcard ladder rung
        review_count: Number of flashcard reviews
        interactions: Append-only interaction log
        definition: Cached definition text, if fetched
        last_encounter_date: Timestamp of the most recent update
    """

    lemma: str
    total_occurrences: int
    relative_difficulty: float
    first_discovery_progress: float
    implicit_score: float = 0.0
    explicit_score: float = 0.0
    familiarity: Familiarity = Familiarity.UNKNOWN
    review_count: int = 0
    interactions: tuple[MemoryInteraction, ...] = ()
    definition: str | None = None
    last_encounter_date: float = 0.0

    @property
    def mastery_score(self) -> float:
        """Composite retention estimate; derived, never stored."""
        return IMPLICIT_WEIGHT * self.implicit_score + EXPLICIT_WEIGHT * self.explicit_score

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "lemma": self.lemma,
            "total_occurrences": self.total_occurrences,
            "relative_difficulty": self.relative_difficulty,
            "first_discovery_progress": self.first_discovery_progress,
            "implicit_score": self.implicit_score,
            "explicit_score": self.explicit_score,
            # Written for readers of the file; recomputed on load
            "mastery_score": self.mastery_score,
            "familiarity": int(self.familiarity),
            "review_count": self.review_count,
            "interactions": [i.to_dict() for i in self.interactions],
            "definition": self.definition,
            "last_encounter_date": self.last_encounter_date,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "VocabularyStat":
        """Deserialize from dictionary."""
        return cls(
            lemma=d["lemma"],
            total_occurrences=int(d["total_occurrences"]),
            relative_difficulty=float(d["relative_difficulty"]),
            first_discovery_progress=float(d["first_discovery_progress"]),
            implicit_score=float(d.get("implicit_score", 0.0)),
            explicit_score=float(d.get("explicit_score", 0.0)),
            familiarity=Familiarity(int(d.get("familiarity", Familiarity.UNKNOWN))),
            review_count=int(d.get("review_count", 0)),
            interactions=tuple(
                MemoryInteraction.from_dict(i) for i in d.get("interactions", [])
            ),
            definition=d.get("definition"),
            last_encounter_date=float(d.get("last_encounter_date", 0.0)),
        )


@dataclass(frozen=True)
class LexiconItem:
    """Read-only projection of a stat plus live corpus data.

    Recomputed whenever the corpus or the stat table changes; never persisted.
    """

    stat: VocabularyStat
    count: int
    occurrences: tuple[str, ...] = ()

    @property
    def lemma(self) -> str:
        return self.stat.lemma

    @property
    def mastery_score(self) -> float:
        return self.stat.mastery_score

    @property
    def first_discovery_progress(self) -> float:
        return self.stat.first_discovery_progress

    @property
    def familiarity(self) -> Familiarity:
        return self.stat.familiarity

    @property
    def review_count(self) -> int:
        return self.stat.review_count

    @property
    def definition(self) -> str | None:
        return self.stat.definition


@dataclass(frozen=True)
class BandedLexiconItem:
    item: LexiconItem
    band: str

    @property
    def lemma(self) -> str:
        return self.item.lemma


@dataclass(frozen=True)
class StudyFilter:
    """Flashcard selection criteria: a frequency band and a learning status."""

    band: str = BAND_ALL
    status: str = STATUS_ALL

    def __post_init__(self) -> None:
        if self.band != BAND_ALL and self.band not in BANDS:
            raise ValueError(f"Unknown band: {self.band}")
        if self.status not in STUDY_STATUSES:
            raise ValueError(f"Unknown study status: {self.status}")


@dataclass(frozen=True)
class LandscapeStats:
    """Corpus-level lexical summary shown next to the landscape."""

    unique_tokens: int
    total_tokens: int
    ttr: float
    difficulty_score: float


@dataclass
class CorpusAnalysis:
    """Result of one pass over the corpus.

    Attributes:
        counts: Occurrences per lemma
        first_positions: 1-based token position of the first occurrence per lemma
        total_tokens: Number of counted tokens
        contexts: Up to a few sentence texts per lemma
    """

    counts: dict[str, int] = field(default_factory=dict)
    first_positions: dict[str, int] = field(default_factory=dict)
    total_tokens: int = 0
    contexts: dict[str, list[str]] = field(default_factory=dict)
