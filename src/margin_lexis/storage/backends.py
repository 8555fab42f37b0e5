"""Storage backends for the vocabulary stat table."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections import Counter
from pathlib import Path
from typing import Dict, Mapping

from ..constants import ENCODING_UTF8
from ..models import VocabularyStat

logger = logging.getLogger(__name__)

StatMap = Dict[str, VocabularyStat]


class StatStore(ABC):
    """Abstract base class for vocabulary stat storage.

    The engine treats the stat table as one value: ``get()`` returns the whole
    map and ``set()`` replaces it. No partial-write API is required.

    **Core Methods (Required):**
        - `get()`: Load the full lemma -> VocabularyStat map
        - `set(stats)`: Replace the stored map
        - `exists()`: Check if the backend holds data
    """

    @abstractmethod
    def get(self) -> StatMap:
        """Return the stored stat map; empty if nothing was stored yet.

        Raises:
            ValueError: If stored data is malformed.
        """
        pass

    @abstractmethod
    def set(self, stats: Mapping[str, VocabularyStat]) -> None:
        """Replace the stored stat map."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        pass

    def get_learning_progress(self) -> dict[str, int]:
        """Count stored lemmas per familiarity rung, e.g. {"SEEN": 4, "MASTERED": 1}."""
        counts = Counter(stat.familiarity.name for stat in self.get().values())
        return dict(counts)


class InMemoryStatStore(StatStore):
    """Process-local store, the default for hosts that persist elsewhere."""

    def __init__(self, stats: Mapping[str, VocabularyStat] | None = None) -> None:
        self._stats: StatMap = dict(stats or {})

    def get(self) -> StatMap:
        return dict(self._stats)

    def set(self, stats: Mapping[str, VocabularyStat]) -> None:
        if stats is None:
            raise ValueError("stats must not be None")
        self._stats = dict(stats)

    def exists(self) -> bool:
        return True


class JsonStatStore(StatStore):
    """JSON file backend; every ``set`` rewrites the whole file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def get(self) -> StatMap:
        if not self.path.exists():
            return {}

        text = self.path.read_text(encoding=ENCODING_UTF8)
        if not text.strip():
            return {}

        try:
            data = json.loads(text)
            return {lemma: VocabularyStat.from_dict(d) for lemma, d in data.items()}
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed stat file {self.path}: {e}") from e

    def set(self, stats: Mapping[str, VocabularyStat]) -> None:
        if stats is None:
            raise ValueError("stats must not be None")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {lemma: stat.to_dict() for lemma, stat in sorted(stats.items())}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding=ENCODING_UTF8)
        tmp_path.replace(self.path)
        logger.debug("Saved %d vocabulary stats to %s", len(payload), self.path)

    def exists(self) -> bool:
        return self.path.exists()
