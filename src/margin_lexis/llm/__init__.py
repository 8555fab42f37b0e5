"""Model-backed definitions.

Provides:
- LLMDefinitionProvider, the shared base for OpenAI, Anthropic and Gemini
- get_provider factory used by the CLI
- DefinitionCache / CachedDefinitionProvider for on-disk reuse
- call_with_retry for flaky remote calls
"""

from margin_lexis.llm.base import LLMDefinitionProvider, get_provider
from margin_lexis.llm.definition_cache import CachedDefinitionProvider, DefinitionCache
from margin_lexis.llm.retry import LLMCallError, call_with_retry

__all__ = [
    "LLMDefinitionProvider",
    "get_provider",
    "DefinitionCache",
    "CachedDefinitionProvider",
    "LLMCallError",
    "call_with_retry",
]
