from __future__ import annotations

from typing import Any, Sequence

import httpx

from .base import ModelClient, ProviderConfig, chat_messages
from .errors import ProviderInitializationError
from .types import Choice, Completion, LLMMessage, Provider

DEFAULT_HOST = "http://localhost:11434"


class OllamaLLM(ModelClient):
    """Local Ollama runtime via its native ``/api/chat`` endpoint."""

    provider = Provider.OLLAMA

    def __init__(
        self,
        config: ProviderConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        try:
            self._http = httpx.Client(
                base_url=(config.server_url or DEFAULT_HOST).rstrip("/"),
                timeout=config.timeout_s,
                transport=transport,
            )
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(f"ollama client setup failed: {e}") from e
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
            "stream": False,
            "format": "json",
            "options": {"temperature": temperature},
        }
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        r = self._http.post("/api/chat", json=payload, **kwargs)
        r.raise_for_status()
        data = r.json()
        if not data:
            return None

        message = data.get("message")
        if not message:
            return Completion(choices=[])
        return Completion(
            choices=[
                Choice(
                    content=message.get("content", ""),
                    finish_reason=data.get("done_reason") or "",
                )
            ]
        )
