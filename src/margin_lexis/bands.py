"""Frequency band classification by rank percentile."""

from __future__ import annotations

import math
from typing import List, Sequence

import pandas as pd

from .constants import (
    BAND,
    BAND_ALL,
    BAND_CORE,
    BAND_ESSENTIAL,
    BAND_NICHE,
    BANDED_LEXICON_COLUMNS,
    CORE_BAND_SHARE,
    ESSENTIAL_BAND_SHARE,
)
from .models import BandedLexiconItem, LexiconItem
from .statistics import lexicon_to_dataframe


def band_for_rank(index: int, total: int) -> str:
    """Band of the entry at a 0-based frequency rank in a lexicon of given size.

    The top ceil(15%) entries are core, entries up to the cumulative ceil(60%)
    are essential and the rest are niche. Bands depend on rank only, so they
    stay stable across corpus sizes.
    """

    if index < 0 or index >= total:
        raise ValueError(f"index {index} out of range for lexicon of size {total}")

    if index < math.ceil(CORE_BAND_SHARE * total):
        return BAND_CORE
    if index < math.ceil(ESSENTIAL_BAND_SHARE * total):
        return BAND_ESSENTIAL
    return BAND_NICHE


def classify_bands(lexicon: Sequence[LexiconItem]) -> List[BandedLexiconItem]:
    """Assign bands to a lexicon that is already sorted by count, descending.

    The classifier trusts the input order; sorting by another key first
    changes the bands.
    """

    if lexicon is None:
        raise ValueError("lexicon must not be None")

    total = len(lexicon)
    return [
        BandedLexiconItem(item=item, band=band_for_rank(index, total))
        for index, item in enumerate(lexicon)
    ]


def filter_by_band(banded: Sequence[BandedLexiconItem], band: str) -> List[BandedLexiconItem]:
    """Keep entries of one band, or all entries for "all"."""
    if band == BAND_ALL:
        return list(banded)
    return [entry for entry in banded if entry.band == band]


def banded_to_dataframe(banded: Sequence[BandedLexiconItem]) -> pd.DataFrame:
    """Tabulate a banded lexicon with canonical column order."""

    df = lexicon_to_dataframe([entry.item for entry in banded])
    df[BAND] = [entry.band for entry in banded]
    return df[BANDED_LEXICON_COLUMNS]
