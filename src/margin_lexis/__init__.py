"""Vocabulary acquisition and mastery engine for a reading companion."""

from margin_lexis.bands import classify_bands
from margin_lexis.engine import LexisEngine
from margin_lexis.landscape import PlotModel, project
from margin_lexis.mastery import record_interaction
from margin_lexis.models import (
    Document,
    LexiconItem,
    StudyFilter,
    VocabularyStat,
    WordOccurrence,
)
from margin_lexis.statistics import aggregate_lexicon, get_or_create_stat
from margin_lexis.study import StudySession, select_cards
from margin_lexis.text_processing import build_document, tokenize_text

__all__ = [
    "Document",
    "LexiconItem",
    "LexisEngine",
    "PlotModel",
    "StudyFilter",
    "StudySession",
    "VocabularyStat",
    "WordOccurrence",
    "aggregate_lexicon",
    "build_document",
    "classify_bands",
    "get_or_create_stat",
    "project",
    "record_interaction",
    "select_cards",
    "tokenize_text",
]
