"""On-disk cache of model definitions, so a lemma is paid for once per model."""

import hashlib
import json
import logging
from pathlib import Path

from margin_lexis.constants import ENCODING_UTF8
from margin_lexis.constants.llm_config import DEFAULT_CACHE_DIR
from margin_lexis.definitions import DefinitionProvider
from margin_lexis.llm.base import LLMDefinitionProvider

logger = logging.getLogger(__name__)


class DefinitionCache:
    """Definitions stored as one JSON file per (model, lemma).

    Args:
        cache_dir: Directory for cache files, created on first use.
        enabled: When False every lookup misses and nothing is written.
    """

    def __init__(self, cache_dir: Path = DEFAULT_CACHE_DIR, enabled: bool = True):
        self.cache_dir = Path(cache_dir)
        self.enabled = enabled
        self.hits = 0
        self.misses = 0

    def _path(self, model: str, lemma: str) -> Path:
        digest = hashlib.sha256(f"{model}|{lemma}".encode()).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def get(self, model: str, lemma: str) -> str | None:
        if not self.enabled:
            return None

        path = self._path(model, lemma)
        try:
            definition = json.loads(path.read_text(encoding=ENCODING_UTF8))["definition"]
        except FileNotFoundError:
            self.misses += 1
            return None
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable cached definition %s: %s", path.name, e)
            self.misses += 1
            return None

        self.hits += 1
        return definition

    def set(self, model: str, lemma: str, definition: str) -> None:
        """Store a definition; blank definitions are never cached."""
        if not self.enabled or not definition.strip():
            return

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        payload = {"lemma": lemma, "model": model, "definition": definition}
        self._path(model, lemma).write_text(
            json.dumps(payload, ensure_ascii=False, indent=2), encoding=ENCODING_UTF8
        )

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def __len__(self) -> int:
        if not self.enabled or not self.cache_dir.exists():
            return 0
        return len(list(self.cache_dir.glob("*.json")))


class CachedDefinitionProvider(DefinitionProvider):
    """Serves definitions from a DefinitionCache before asking the model."""

    def __init__(self, provider: LLMDefinitionProvider, cache: DefinitionCache):
        self.provider = provider
        self.cache = cache

    @property
    def model(self) -> str:
        return self.provider.model

    def fetch_definition(self, lemma: str) -> str:
        cached = self.cache.get(self.model, lemma)
        if cached:
            return cached

        definition = self.provider.fetch_definition(lemma)
        self.cache.set(self.model, lemma, definition)
        return definition
