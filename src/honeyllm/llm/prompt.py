from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from .errors import PromptTemplateError
from .types import LLMMessage, Provider

if TYPE_CHECKING:
    from honeyllm.http_request import HTTPRequest

# Providers that honor a distinct system role. Others get the system prompt
# folded into the single human message.
SUPPORTS_SYSTEM_PROMPT: Mapping[Provider, bool] = MappingProxyType(
    {
        Provider.OPENAI: True,
        Provider.ANTHROPIC: True,
        Provider.OLLAMA: True,
        Provider.COHERE: True,
        Provider.GOOGLE_AI: False,
        Provider.GCP_VERTEX: False,
    }
)


def supports_system_prompt(provider: Provider | str) -> bool:
    return SUPPORTS_SYSTEM_PROMPT.get(Provider.parse(provider), False)


@dataclass(frozen=True)
class PromptTemplates:
    """System prompt plus a user prompt with one ``%s`` slot for the request."""

    system: str
    user: str

    @classmethod
    def from_env(cls) -> "PromptTemplates":
        from honeyllm import config

        return cls(system=config.SYSTEM_PROMPT, user=config.USER_PROMPT)


def render_user_prompt(template: str, request_text: str) -> str:
    try:
        return template % (request_text,)
    except (TypeError, ValueError) as e:
        raise PromptTemplateError(
            f"user prompt template must hold exactly one %s placeholder: {e}"
        ) from e


def build_messages(
    request: HTTPRequest,
    *,
    system_prompt: str,
    user_prompt: str,
    provider: Provider | str,
) -> list[LLMMessage]:
    """Turn a captured request into the message sequence for ``provider``."""

    request_text = request.text().strip()
    user = render_user_prompt(user_prompt, request_text)

    if supports_system_prompt(provider):
        return [
            LLMMessage(role="system", content=system_prompt),
            LLMMessage(role="human", content=user),
        ]
    return [LLMMessage(role="human", content=system_prompt + "\n" + user)]
