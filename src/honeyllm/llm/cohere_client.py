from __future__ import annotations

from typing import Any, Sequence

import httpx

from .base import ModelClient, ProviderConfig, chat_messages
from .errors import ProviderInitializationError
from .types import Choice, Completion, LLMMessage, Provider

COHERE_API = "https://api.cohere.com"


class CohereLLM(ModelClient):
    """Cohere v2 chat API over plain HTTP."""

    provider = Provider.COHERE

    def __init__(
        self,
        config: ProviderConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        if not config.api_key:
            raise ProviderInitializationError("cohere provider requires api_key")
        try:
            self._http = httpx.Client(
                base_url=(config.server_url or COHERE_API).rstrip("/"),
                headers={
                    "Authorization": f"Bearer {config.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=config.timeout_s,
                transport=transport,
            )
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(f"cohere client setup failed: {e}") from e
        self.model = config.model

    def generate_content(
        self,
        messages: Sequence[LLMMessage],
        *,
        temperature: float,
        timeout: float | None = None,
    ) -> Completion | None:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": chat_messages(messages),
            "temperature": temperature,
            "response_format": {"type": "json_object"},
            "stream": False,
        }
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        r = self._http.post("/v2/chat", json=payload, **kwargs)
        r.raise_for_status()
        data = r.json()
        if not data:
            return None

        message = data.get("message")
        if not message:
            return Completion(choices=[])
        text = "".join(
            part.get("text", "")
            for part in message.get("content") or []
            if part.get("type") == "text"
        )
        return Completion(
            choices=[Choice(content=text, finish_reason=data.get("finish_reason") or "")]
        )
