"""Definitions from the Google Gemini API."""

from google import genai
from google.genai import types

from margin_lexis.constants.llm_config import DEFAULT_MODEL_GEMINI, DEFINITION_MAX_OUTPUT_TOKENS
from margin_lexis.llm.base import LLMDefinitionProvider


class GeminiDefinitionProvider(LLMDefinitionProvider):
    provider_name = "gemini"

    def __init__(self, model: str = DEFAULT_MODEL_GEMINI, **kwargs):
        super().__init__(model, **kwargs)
        self._client = genai.Client(api_key=self.api_key)

    def _config(self) -> types.GenerateContentConfig:
        config_kwargs: dict = {
            "temperature": self.temperature,
            "max_output_tokens": DEFINITION_MAX_OUTPUT_TOKENS,
        }
        if "flash" in self.model:
            # a one-sentence answer needs no thinking budget
            config_kwargs["thinking_config"] = types.ThinkingConfig(thinking_budget=0)
        return types.GenerateContentConfig(**config_kwargs)

    def _generate(self, prompt: str) -> str:
        response = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._config(),
        )
        return response.text or ""
