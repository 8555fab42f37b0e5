"""Definition providers for each supported model vendor."""

from margin_lexis.llm.providers.anthropic import AnthropicDefinitionProvider
from margin_lexis.llm.providers.gemini import GeminiDefinitionProvider
from margin_lexis.llm.providers.openai import OpenAIDefinitionProvider

__all__ = [
    "AnthropicDefinitionProvider",
    "GeminiDefinitionProvider",
    "OpenAIDefinitionProvider",
]
