"""Definitions from the OpenAI chat completions API."""

from openai import OpenAI

from margin_lexis.constants.llm_config import DEFAULT_MODEL_OPENAI, DEFINITION_MAX_OUTPUT_TOKENS
from margin_lexis.llm.base import LLMDefinitionProvider


class OpenAIDefinitionProvider(LLMDefinitionProvider):
    provider_name = "openai"

    def __init__(self, model: str = DEFAULT_MODEL_OPENAI, **kwargs):
        super().__init__(model, **kwargs)
        self.client = OpenAI(api_key=self.api_key)

    def _generate(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=DEFINITION_MAX_OUTPUT_TOKENS,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
