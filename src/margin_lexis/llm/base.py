"""Shared plumbing for definition providers backed by hosted models."""

import logging
import os
from abc import abstractmethod

from margin_lexis.constants.llm_config import (
    API_KEY_ENV_VARS,
    DEFAULT_MODEL_ANTHROPIC,
    DEFAULT_MODEL_GEMINI,
    DEFAULT_MODEL_OPENAI,
    DEFAULT_TEMPERATURE,
    DEFINITION_MAX_RETRIES,
    DEFINITION_PROMPT_TEMPLATE,
    DEFINITION_RETRY_DELAY,
)
from margin_lexis.definitions import DefinitionProvider
from margin_lexis.llm.retry import call_with_retry

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "openai": DEFAULT_MODEL_OPENAI,
    "anthropic": DEFAULT_MODEL_ANTHROPIC,
    "gemini": DEFAULT_MODEL_GEMINI,
}

_WRAPPING_QUOTES = "\"'“”«» "


def build_definition_prompt(lemma: str) -> str:
    return DEFINITION_PROMPT_TEMPLATE.format(lemma=lemma)


def clean_definition(reply: str | None) -> str:
    """Collapse whitespace and drop quotes the model wrapped around its answer."""
    return " ".join((reply or "").split()).strip(_WRAPPING_QUOTES)


class LLMDefinitionProvider(DefinitionProvider):
    """Definition provider that asks a hosted model.

    Subclasses send one prompt and return the raw reply text. Building the
    prompt, retrying and cleaning the reply happen here.

    Args:
        model: Model name.
        api_key: API key; read from the provider's env var when omitted.
        temperature: Sampling temperature.
        max_retries: Retries on failure or empty reply.
        retry_delay: Base back-off delay in seconds.
    """

    provider_name = ""

    def __init__(
        self,
        model: str,
        *,
        api_key: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_retries: int = DEFINITION_MAX_RETRIES,
        retry_delay: float = DEFINITION_RETRY_DELAY,
    ):
        env_var = API_KEY_ENV_VARS[self.provider_name]
        self.api_key = api_key or os.environ.get(env_var)
        if not self.api_key:
            raise ValueError(f"{env_var} not found. Set it as environment variable or pass api_key.")

        self.model = model
        self.temperature = temperature
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    @abstractmethod
    def _generate(self, prompt: str) -> str:
        """Send prompt to the model and return its raw reply text."""
        pass

    def fetch_definition(self, lemma: str) -> str:
        prompt = build_definition_prompt(lemma)
        definition = call_with_retry(
            lambda: clean_definition(self._generate(prompt)),
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
        )
        logger.debug("Defined %r with %s/%s", lemma, self.provider_name, self.model)
        return definition


def get_provider(provider_name: str, model: str | None = None, **kwargs) -> LLMDefinitionProvider:
    """Build the definition provider for a provider name.

    Raises:
        ValueError: If provider_name is unknown or its API key is missing.

    Examples:
        >>> provider = get_provider("gemini")
        >>> provider = get_provider("openai", "gpt-4.1-nano")
    """
    # Import here to avoid circular imports
    from margin_lexis.llm.providers.anthropic import AnthropicDefinitionProvider
    from margin_lexis.llm.providers.gemini import GeminiDefinitionProvider
    from margin_lexis.llm.providers.openai import OpenAIDefinitionProvider

    providers = {
        "openai": OpenAIDefinitionProvider,
        "anthropic": AnthropicDefinitionProvider,
        "gemini": GeminiDefinitionProvider,
    }

    if provider_name not in providers:
        raise ValueError(f"Unknown provider: {provider_name}. Available: {list(providers)}")

    return providers[provider_name](model=model or DEFAULT_MODELS[provider_name], **kwargs)
