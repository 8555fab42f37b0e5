"""Definition provider seam and the asynchronous fetcher used on flashcard reveal."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from .constants import DEFINITION_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class DefinitionProvider(ABC):
    """Source of short definitions for lemmas.

    Model-backed implementations live in ``margin_lexis.llm``.
    """

    @abstractmethod
    def fetch_definition(self, lemma: str) -> str:
        """Return a definition for lemma.

        Raises:
            Exception: Any provider failure; callers degrade to a placeholder.
        """
        pass


class DefinitionFetcher:
    """Runs a blocking DefinitionProvider off the event loop with a timeout.

    ``fetch`` never raises: failures, timeouts and empty results return None
    so the caller can show a placeholder and retry on the next reveal.
    """

    def __init__(
        self,
        provider: DefinitionProvider,
        *,
        timeout: float = DEFINITION_TIMEOUT_SECONDS,
    ):
        self.provider = provider
        self.timeout = timeout

    async def fetch(self, lemma: str) -> str | None:
        try:
            definition = await asyncio.wait_for(
                asyncio.to_thread(self.provider.fetch_definition, lemma),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Definition fetch for %r timed out after %.1fs", lemma, self.timeout)
            return None
        except Exception as e:  # noqa: BLE001
            logger.warning("Definition fetch for %r failed: %s", lemma, e)
            return None

        definition = (definition or "").strip()
        return definition or None
