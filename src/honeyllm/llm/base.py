from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from .types import Completion, LLMMessage, Provider

# Appended to every prompt for backends whose JSON mode needs it spelled out.
JSON_INSTRUCTION = "Respond with a single valid JSON object only. No markdown, no prose."


@dataclass(frozen=True)
class ProviderConfig:
    """Everything needed to set up one provider client.

    ``provider`` may be a :class:`Provider` or its string value; it is resolved
    by the factory so an unknown value surfaces as ``UnsupportedProviderError``.
    """

    provider: Provider | str
    model: str
    api_key: str = field(default="", repr=False)
    server_url: Optional[str] = None
    cloud_project: Optional[str] = None
    cloud_location: Optional[str] = None
    temperature: float = 1.0
    max_tokens: int = 4096
    timeout_s: float = 60.0

    def __post_init__(self) -> None:
        if not 0.0 <= float(self.temperature) <= 2.0:
            raise ValueError(
                f"temperature must be within [0, 2], got {self.temperature}"
            )

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        from honeyllm import config

        return cls(
            provider=config.LLM_PROVIDER,
            model=config.LLM_MODEL,
            api_key=config.api_key_for(config.LLM_PROVIDER),
            server_url=config.LLM_SERVER_URL or None,
            cloud_project=config.LLM_CLOUD_PROJECT or None,
            cloud_location=config.LLM_CLOUD_LOCATION or None,
            temperature=_number("LLM_TEMPERATURE", config.LLM_TEMPERATURE, float),
            max_tokens=_number("LLM_MAX_TOKENS", config.LLM_MAX_TOKENS, int),
            timeout_s=_number("LLM_TIMEOUT_S", config.LLM_TIMEOUT_S, float),
        )


def _number(name: str, raw, kind):
    try:
        return kind(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


_CHAT_ROLES = {"system": "system", "human": "user"}


def chat_messages(messages: Sequence[LLMMessage]) -> list[dict[str, str]]:
    """Render messages in the common ``{"role", "content"}`` chat shape."""
    return [{"role": _CHAT_ROLES[m.role], "content": m.content} for m in messages]


class ModelClient(Protocol):
    """An initialized backend handle.

    Implementations request JSON-formatted output and keep no per-call state,
    so a single instance can be shared across threads.
    """

    provider: Provider
    model: str

    def generate_content(
        self,
        messages: Sequence[LLMMessage],
        *,
        temperature: float,
        timeout: float | None = None,
    ) -> Completion | None:
        raise NotImplementedError
