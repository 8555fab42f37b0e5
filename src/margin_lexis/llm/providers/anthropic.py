"""Definitions from the Anthropic messages API."""

from anthropic import Anthropic

from margin_lexis.constants.llm_config import DEFAULT_MODEL_ANTHROPIC, DEFINITION_MAX_OUTPUT_TOKENS
from margin_lexis.llm.base import LLMDefinitionProvider


class AnthropicDefinitionProvider(LLMDefinitionProvider):
    provider_name = "anthropic"

    def __init__(self, model: str = DEFAULT_MODEL_ANTHROPIC, **kwargs):
        super().__init__(model, **kwargs)
        self.client = Anthropic(api_key=self.api_key)

    def _generate(self, prompt: str) -> str:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=DEFINITION_MAX_OUTPUT_TOKENS,
            temperature=self.temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        # Definitions come back as a single text block
        return " ".join(block.text for block in message.content if getattr(block, "text", None))
