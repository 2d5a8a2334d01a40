from __future__ import annotations

from typing import Any, Sequence

from .base import JSON_INSTRUCTION, ModelClient, ProviderConfig, chat_messages
from .errors import ProviderInitializationError
from .types import Choice, Completion, LLMMessage, Provider


class OpenAILLM(ModelClient):
    """OpenAI chat completions client.

    Also covers OpenAI-compatible servers: with ``server_url`` set the API key
    becomes optional.
    """

    provider = Provider.OPENAI

    def __init__(self, config: ProviderConfig):
        if not config.api_key and not config.server_url:
            raise ProviderInitializationError(
                "openai provider requires api_key (or server_url for a compatible server)"
            )

        try:
            from openai import OpenAI  # type: ignore
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(
                "openai SDK not installed. Add dependency 'openai'."
            ) from e

        kwargs: dict[str, Any] = {
            "api_key": config.api_key or "not-needed",
            "timeout": config.timeout_s,
        }
        if config.server_url:
            kwargs["base_url"] = config.server_url

        try:
            self._client = OpenAI(**kwargs)
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(f"openai client setup failed: {e}") from e
        self.model = config.model

    def generate_content(
        self,
        messages: Sequence[LLMMessage],
        *,
        temperature: float,
        timeout: float | None = None,
    ) -> Completion | None:
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        resp = self._client.chat.completions.create(
            model=self.model,
            messages=chat_messages(messages)
            + [{"role": "system", "content": JSON_INSTRUCTION}],
            temperature=temperature,
            response_format={"type": "json_object"},
            **kwargs,
        )
        if resp is None:
            return None
        return Completion(
            choices=[
                Choice(
                    content=c.message.content or "",
                    finish_reason=c.finish_reason or "",
                )
                for c in resp.choices or []
            ]
        )
