"""LLM provider abstractions (OpenAI / Google / Vertex / Anthropic / Cohere / Ollama).

Design goals:
- Keep provider-specific SDKs isolated.
- Provide a small, stable interface for "request in, JSON response out".
- Validate output against a JSON Schema before handing it back to the caller.
"""

from .base import ModelClient, ProviderConfig
from .factory import build_llm
from .processor import clean_response, generate_response, validate_response
from .prompt import SUPPORTS_SYSTEM_PROMPT, PromptTemplates, build_messages
from .types import Choice, Completion, GeneratedResponse, LLMMessage, Provider

__all__ = [
    "Choice",
    "Completion",
    "GeneratedResponse",
    "LLMMessage",
    "ModelClient",
    "PromptTemplates",
    "Provider",
    "ProviderConfig",
    "SUPPORTS_SYSTEM_PROMPT",
    "build_llm",
    "build_messages",
    "clean_response",
    "generate_response",
    "validate_response",
]
