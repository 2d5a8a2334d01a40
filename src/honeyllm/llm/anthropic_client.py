from __future__ import annotations

from typing import Any, Sequence

from .base import JSON_INSTRUCTION, ModelClient, ProviderConfig, chat_messages
from .errors import ProviderInitializationError
from .types import Choice, Completion, LLMMessage, Provider


class AnthropicLLM(ModelClient):
    provider = Provider.ANTHROPIC

    def __init__(self, config: ProviderConfig):
        if not config.api_key:
            raise ProviderInitializationError("anthropic provider requires api_key")

        try:
            from anthropic import Anthropic  # type: ignore
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(
                "anthropic SDK not installed. Add dependency 'anthropic'."
            ) from e

        kwargs: dict[str, Any] = {"api_key": config.api_key, "timeout": config.timeout_s}
        if config.server_url:
            kwargs["base_url"] = config.server_url

        try:
            self._client = Anthropic(**kwargs)
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(
                f"anthropic client setup failed: {e}"
            ) from e
        self.model = config.model
        self._max_tokens = config.max_tokens

    def generate_content(
        self,
        messages: Sequence[LLMMessage],
        *,
        temperature: float,
        timeout: float | None = None,
    ) -> Completion | None:
        system_parts = [m.content for m in messages if m.role == "system"]
        system_parts.append(JSON_INSTRUCTION)
        turns = chat_messages([m for m in messages if m.role != "system"])

        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        resp = self._client.messages.create(
            model=self.model,
            max_tokens=self._max_tokens,
            temperature=temperature,
            system="\n\n".join(system_parts),
            messages=turns,
            **kwargs,
        )
        if resp is None:
            return None

        # Content comes back as blocks; text blocks form the single candidate.
        texts = [
            block.text
            for block in resp.content or []
            if getattr(block, "type", None) == "text"
        ]
        if not texts:
            return Completion(choices=[])
        return Completion(
            choices=[Choice(content="".join(texts), finish_reason=resp.stop_reason or "")]
        )
