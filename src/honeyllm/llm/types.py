from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from .errors import UnsupportedProviderError

Role = Literal["system", "human"]


class Provider(str, Enum):
    OPENAI = "openai"
    GOOGLE_AI = "googleai"
    GCP_VERTEX = "gcp-vertex"
    ANTHROPIC = "anthropic"
    COHERE = "cohere"
    OLLAMA = "ollama"

    @classmethod
    def parse(cls, value: Provider | str) -> Provider:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower().strip())
        except ValueError:
            raise UnsupportedProviderError(
                f"unsupported llm provider: {value!r}"
            ) from None


@dataclass(frozen=True)
class LLMMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class Choice:
    """One candidate completion returned by a backend."""

    content: str
    finish_reason: str = ""


@dataclass(frozen=True)
class Completion:
    """Provider-neutral result of a single invocation."""

    choices: list[Choice] = field(default_factory=list)


@dataclass(frozen=True)
class GeneratedResponse:
    """Synthetic HTTP response produced by the model.

    ``raw_text`` is the cleaned model output it was decoded from.
    """

    headers: dict[str, str]
    body: str
    raw_text: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {"headers": dict(self.headers), "body": self.body}
