"""2-D landscape projection of a lexicon.

Three views share one set of rank computations:

- content: x = first discovery progress, y = cumulative share of lemmas
  discovered so far (the "climbing curve").
- memory: x = frequency rank, y = mastery score.
- reality: memory coordinates, coloured by discovery and mastery.

Zones (core / slopes / canyons) always partition the frequency-rank axis and
use their own cut points, separate from the study bands.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from .constants import (
    CLASS_LEARNING,
    CLASS_MASTERED,
    CLASS_UNDISCOVERED,
    DISCOVERY_RANK,
    FREQ_RANK,
    IS_DISCOVERED,
    LEMMA,
    MASTERED_SCORE_THRESHOLD,
    OPACITY,
    OPACITY_CONTENT_HIDDEN,
    OPACITY_DISCOVERED,
    OPACITY_MEMORY_FLOOR,
    OPACITY_REALITY_HIDDEN,
    PLOT_COLUMNS,
    POINT_SIZE_BASE,
    POINT_SIZE_LOG_OFFSET,
    POINT_SIZE_SCALE,
    VIEW_CONTENT,
    VIEW_MEMORY,
    VIEWS,
    VISUAL_CLASS,
    X,
    Y,
    ZONE,
    ZONE_CANYONS,
    ZONE_CANYONS_START,
    ZONE_CORE,
    ZONE_SLOPES,
    ZONE_SLOPES_START,
    ZONES,
)
from .mastery import clamp
from .models import LexiconItem


@dataclass(frozen=True)
class PlotPoint:
    lemma: str
    x: float
    y: float
    opacity: float
    size: float
    visual_class: str
    is_discovered: bool
    freq_rank: float
    discovery_rank: float
    zone: str
    mastery_score: float
    count: int


@dataclass
class PlotModel:
    """Read-only plot description for one view and simulated progress."""

    view: str
    simulated_progress: float
    points: List[PlotPoint] = field(default_factory=list)
    curve: List[Tuple[float, float]] = field(default_factory=list)
    zones: Dict[str, List[PlotPoint]] = field(default_factory=dict)


def zone_for_rank(freq_rank: float) -> str:
    if freq_rank < ZONE_SLOPES_START:
        return ZONE_CORE
    if freq_rank < ZONE_CANYONS_START:
        return ZONE_SLOPES
    return ZONE_CANYONS


def point_size(count: int) -> float:
    return math.log(count + POINT_SIZE_LOG_OFFSET) * POINT_SIZE_SCALE + POINT_SIZE_BASE


def _visual_class(mastery_score: float, is_discovered: bool) -> str:
    if mastery_score > MASTERED_SCORE_THRESHOLD:
        return CLASS_MASTERED
    if is_discovered:
        return CLASS_LEARNING
    return CLASS_UNDISCOVERED


def discovery_curve(lexicon: Sequence[LexiconItem]) -> List[Tuple[float, float]]:
    """Cumulative discovery curve: (first discovery progress, share discovered)."""

    total = len(lexicon)
    by_discovery = sorted(lexicon, key=lambda item: item.first_discovery_progress)
    return [
        (item.first_discovery_progress, (index + 1) / total)
        for index, item in enumerate(by_discovery)
    ]


def project(
    lexicon: Sequence[LexiconItem],
    view: str,
    simulated_progress: float,
) -> PlotModel:
    """Map every lexicon item to plot coordinates for a view.

    Args:
        lexicon: Lexicon items in any order.
        view: "content", "memory" or "reality".
        simulated_progress: Hypothetical reading position in [0, 1]; clamped.

    Returns:
        PlotModel with one point per item (in input order), the cumulative
        discovery curve and the three frequency zones.

    Raises:
        ValueError: If view is unknown.
    """

    if view not in VIEWS:
        raise ValueError(f"Unknown view: {view}. Available: {list(VIEWS)}")

    progress = clamp(float(simulated_progress))
    total = len(lexicon)
    model = PlotModel(view=view, simulated_progress=progress, zones={zone: [] for zone in ZONES})
    if total == 0:
        return model

    freq_order = sorted(range(total), key=lambda i: (-lexicon[i].count, lexicon[i].lemma))
    discovery_order = sorted(range(total), key=lambda i: lexicon[i].first_discovery_progress)
    freq_index = {item_idx: rank for rank, item_idx in enumerate(freq_order)}
    discovery_index = {item_idx: rank for rank, item_idx in enumerate(discovery_order)}

    for i, item in enumerate(lexicon):
        mastery = item.mastery_score
        is_discovered = item.first_discovery_progress <= progress
        freq_rank = freq_index[i] / total
        discovery_rank = (discovery_index[i] + 1) / total

        if view == VIEW_CONTENT:
            x, y = item.first_discovery_progress, discovery_rank
            opacity = OPACITY_DISCOVERED if is_discovered else OPACITY_CONTENT_HIDDEN
        elif view == VIEW_MEMORY:
            x, y = freq_rank, mastery
            opacity = mastery * (1.0 - OPACITY_MEMORY_FLOOR) + OPACITY_MEMORY_FLOOR
        else:
            x, y = freq_rank, mastery
            opacity = OPACITY_DISCOVERED if is_discovered else OPACITY_REALITY_HIDDEN

        point = PlotPoint(
            lemma=item.lemma,
            x=x,
            y=y,
            opacity=opacity,
            size=point_size(item.count),
            visual_class=_visual_class(mastery, is_discovered),
            is_discovered=is_discovered,
            freq_rank=freq_rank,
            discovery_rank=discovery_rank,
            zone=zone_for_rank(freq_rank),
            mastery_score=mastery,
            count=item.count,
        )
        model.points.append(point)
        model.zones[point.zone].append(point)

    model.curve = discovery_curve(lexicon)
    return model


def discovery_rate(model: PlotModel) -> float:
    """Share of points discovered at the model's simulated progress."""
    if not model.points:
        return 0.0
    return sum(1 for point in model.points if point.is_discovered) / len(model.points)


def plot_to_dataframe(model: PlotModel) -> pd.DataFrame:
    rows = [
        {
            LEMMA: p.lemma,
            X: p.x,
            Y: p.y,
            OPACITY: p.opacity,
            VISUAL_CLASS: p.visual_class,
            FREQ_RANK: p.freq_rank,
            DISCOVERY_RANK: p.discovery_rank,
            IS_DISCOVERED: p.is_discovered,
            ZONE: p.zone,
        }
        for p in model.points
    ]
    return pd.DataFrame(rows, columns=PLOT_COLUMNS)
