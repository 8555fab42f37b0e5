"""Settings for model-generated definitions."""

from margin_lexis.constants.paths import DEFINITION_CACHE_DIR

# Provider selection
DEFAULT_PROVIDER = "gemini"
PROVIDER_ENV_VAR = "MARGIN_LEXIS_PROVIDER"

DEFAULT_MODEL_OPENAI = "gpt-4.1-mini"
DEFAULT_MODEL_ANTHROPIC = "claude-haiku-4-5-20251001"
DEFAULT_MODEL_GEMINI = "gemini-3-flash-preview"

API_KEY_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GOOGLE_API_KEY",
}

# Generation
DEFAULT_TEMPERATURE = 0.0
DEFINITION_MAX_OUTPUT_TOKENS = 256
DEFINITION_PROMPT_TEMPLATE = (
    'Give a concise dictionary definition of "{lemma}" in one sentence. '
    "Reply with the definition only."
)

# Retries
DEFINITION_MAX_RETRIES = 2
DEFINITION_RETRY_DELAY = 1.0

DEFAULT_CACHE_DIR = DEFINITION_CACHE_DIR
