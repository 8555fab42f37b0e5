"""Universal opener for stat stores."""

from __future__ import annotations

from pathlib import Path

from margin_lexis.storage.backends import InMemoryStatStore, JsonStatStore, StatStore

MEMORY_SOURCE = "memory://"


def open_stat_store(source: str | Path | None) -> StatStore:
    """Open a stat store for a source identifier.

    Supports:
    - None or "memory://": process-local store
    - Anything else: JSON file path

    Examples:
        >>> store = open_stat_store("data/stats/project_vocabulary_stats.json")
        >>> store = open_stat_store("memory://")
    """
    if source is None or str(source) == MEMORY_SOURCE:
        return InMemoryStatStore()
    return JsonStatStore(source)
