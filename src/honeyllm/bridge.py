"""honeyllm.bridge

Single entry point for the embedding responder:

    from honeyllm.bridge import ResponseBridge

    bridge = ResponseBridge.from_env()
    resp = bridge.respond(request, timeout=30)
    # resp.headers, resp.body

The bridge is built once per process and shared; ``respond`` keeps no state
between calls.
"""

from __future__ import annotations

import threading
from typing import Optional

from honeyllm import logger as logger_mod
from honeyllm.http_request import HTTPRequest
from honeyllm.llm.base import ModelClient, ProviderConfig
from honeyllm.llm.factory import build_llm
from honeyllm.llm.processor import generate_response
from honeyllm.llm.prompt import PromptTemplates, build_messages
from honeyllm.llm.types import GeneratedResponse, Provider

log = logger_mod.get_logger()


class ResponseBridge:
    def __init__(
        self,
        client: ModelClient,
        *,
        temperature: float,
        prompts: PromptTemplates,
    ):
        self.client = client
        self.provider = Provider.parse(client.provider)
        self.temperature = temperature
        self.prompts = prompts

    @classmethod
    def from_config(
        cls, config: ProviderConfig, prompts: PromptTemplates
    ) -> "ResponseBridge":
        return cls(build_llm(config), temperature=config.temperature, prompts=prompts)

    @classmethod
    def from_env(cls) -> "ResponseBridge":
        return cls.from_config(ProviderConfig.from_env(), PromptTemplates.from_env())

    def respond(
        self,
        request: HTTPRequest,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> GeneratedResponse:
        messages = build_messages(
            request,
            system_prompt=self.prompts.system,
            user_prompt=self.prompts.user,
            provider=self.provider,
        )
        log.debug(f"Responding to {request.method} {request.target}")
        return generate_response(
            self.client,
            self.temperature,
            messages,
            timeout=timeout,
            cancel=cancel,
        )
