from __future__ import annotations

from functools import partial
from types import MappingProxyType
from typing import Callable, Mapping

from honeyllm import logger as logger_mod

from .anthropic_client import AnthropicLLM
from .base import ModelClient, ProviderConfig
from .cohere_client import CohereLLM
from .errors import ProviderInitializationError
from .google_client import GoogleGenAILLM
from .ollama_client import OllamaLLM
from .openai_client import OpenAILLM
from .types import Provider

log = logger_mod.get_logger()

Initializer = Callable[[ProviderConfig], ModelClient]

# Read-only: adding a provider means one entry here plus its client module.
INITIALIZERS: Mapping[Provider, Initializer] = MappingProxyType(
    {
        Provider.OPENAI: OpenAILLM,
        Provider.GOOGLE_AI: partial(GoogleGenAILLM, vertex=False),
        Provider.GCP_VERTEX: partial(GoogleGenAILLM, vertex=True),
        Provider.ANTHROPIC: AnthropicLLM,
        Provider.COHERE: CohereLLM,
        Provider.OLLAMA: OllamaLLM,
    }
)


def build_llm(config: ProviderConfig) -> ModelClient:
    """Factory for provider clients.

    Raises ``UnsupportedProviderError`` for an unknown provider and
    ``ProviderInitializationError`` when the selected backend cannot be set up.
    No generation call is made.
    """

    provider = Provider.parse(config.provider)
    if not config.model.strip():
        raise ProviderInitializationError(f"{provider.value} provider requires a model")

    client = INITIALIZERS[provider](config)
    log.info("Initialized %s client for model %s", provider.value, config.model)
    return client
