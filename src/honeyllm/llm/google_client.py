from __future__ import annotations

from typing import Any, Sequence

from .base import ModelClient, ProviderConfig
from .errors import ProviderInitializationError
from .types import Choice, Completion, LLMMessage, Provider


class GoogleGenAILLM(ModelClient):
    """Gemini client for both Google AI (API key) and Vertex AI (project/location).

    Both backends are served by the ``google-genai`` SDK; only the client
    construction differs.
    """

    def __init__(self, config: ProviderConfig, *, vertex: bool = False):
        self.provider = Provider.GCP_VERTEX if vertex else Provider.GOOGLE_AI
        if vertex:
            missing = [
                name
                for name in ("cloud_project", "cloud_location")
                if not getattr(config, name)
            ]
            if missing:
                raise ProviderInitializationError(
                    f"gcp-vertex provider requires {', '.join(missing)}"
                )
        elif not config.api_key:
            raise ProviderInitializationError("googleai provider requires api_key")

        try:
            from google import genai  # type: ignore
            from google.genai import types as genai_types  # type: ignore
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(
                "google-genai SDK not installed. Add dependency 'google-genai'."
            ) from e

        http_options: dict[str, Any] = {"timeout": _millis(config.timeout_s)}
        if config.server_url:
            http_options["base_url"] = config.server_url

        kwargs: dict[str, Any] = {
            "http_options": genai_types.HttpOptions(**http_options)
        }
        if vertex:
            kwargs.update(
                vertexai=True,
                project=config.cloud_project,
                location=config.cloud_location,
            )
        else:
            kwargs["api_key"] = config.api_key

        try:
            self._client = genai.Client(**kwargs)
        except Exception as e:  # noqa: BLE001
            raise ProviderInitializationError(
                f"{self.provider.value} client setup failed: {e}"
            ) from e
        self._types = genai_types
        self.model = config.model

    def generate_content(
        self,
        messages: Sequence[LLMMessage],
        *,
        temperature: float,
        timeout: float | None = None,
    ) -> Completion | None:
        t = self._types
        system = "\n".join(m.content for m in messages if m.role == "system")
        contents = [
            t.Content(role="user", parts=[t.Part(text=m.content)])
            for m in messages
            if m.role != "system"
        ]
        cfg: dict[str, Any] = {
            "temperature": temperature,
            "response_mime_type": "application/json",
        }
        if system:
            cfg["system_instruction"] = system
        if timeout is not None:
            cfg["http_options"] = t.HttpOptions(timeout=_millis(timeout))

        resp = self._client.models.generate_content(
            model=self.model,
            contents=contents,
            config=t.GenerateContentConfig(**cfg),
        )
        if resp is None:
            return None

        choices = []
        for candidate in resp.candidates or []:
            parts = getattr(candidate.content, "parts", None) or []
            text = "".join(p.text for p in parts if getattr(p, "text", None))
            reason = candidate.finish_reason
            choices.append(
                Choice(content=text, finish_reason=str(getattr(reason, "name", reason) or ""))
            )
        return Completion(choices=choices)


def _millis(seconds: float) -> int:
    return int(seconds * 1000)
