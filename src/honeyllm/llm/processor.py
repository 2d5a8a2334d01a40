from __future__ import annotations

import re
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, wait
from typing import Optional, Sequence

from honeyllm import logger as logger_mod

from ._json import parse_json, validate_json
from .base import ModelClient
from .errors import (
    ContentGenerationError,
    EmptyContentError,
    GenerationCancelledError,
    GenerationTimeoutError,
    LLMValidationError,
    NilResponseError,
    NoChoicesError,
)
from .types import Completion, GeneratedResponse, LLMMessage

log = logger_mod.get_logger()

# A leading fence (optionally tagged json) or any other fence marker; one pass.
_FENCE_RE = re.compile(r"^```(?:json)?|```")

# How often a blocked wait re-checks the cancel signal.
POLL_INTERVAL_S = 0.05


def clean_response(text: str) -> str:
    """Remove markdown code fence markers and surrounding whitespace."""
    return _FENCE_RE.sub("", text).strip()


def validate_response(cleaned: str) -> GeneratedResponse:
    data = parse_json(cleaned)
    validate_json(data, cleaned=cleaned)
    return GeneratedResponse(
        headers=dict(data["headers"]), body=data["body"], raw_text=cleaned
    )


def _start(fn, *args, **kwargs) -> Future:
    """Run ``fn`` on its own daemon thread; an abandoned call never blocks others."""

    future: Future = Future()

    def runner() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args, **kwargs)
        except BaseException as e:  # noqa: BLE001
            future.set_exception(e)
        else:
            future.set_result(result)

    threading.Thread(target=runner, name="honeyllm-generate", daemon=True).start()
    return future


def _invoke(
    client: ModelClient,
    messages: Sequence[LLMMessage],
    temperature: float,
    *,
    timeout: Optional[float],
    cancel: Optional[threading.Event],
) -> Completion | None:
    if cancel is not None and cancel.is_set():
        raise GenerationCancelledError("content generation cancelled before invocation")

    deadline = None if timeout is None else time.monotonic() + timeout
    remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
    future = _start(
        client.generate_content, messages, temperature=temperature, timeout=remaining
    )

    while True:
        wait_s = POLL_INTERVAL_S
        if deadline is not None:
            wait_s = max(0.0, min(wait_s, deadline - time.monotonic()))
        wait([future], timeout=wait_s, return_when=FIRST_COMPLETED)

        if future.done():
            break
        if cancel is not None and cancel.is_set():
            raise GenerationCancelledError("content generation cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise GenerationTimeoutError(
                f"content generation exceeded deadline of {timeout}s"
            )

    try:
        return future.result()
    except Exception as e:  # noqa: BLE001
        raise ContentGenerationError(f"content generation failed: {e}") from e


def generate_response(
    client: ModelClient,
    temperature: float,
    messages: Sequence[LLMMessage],
    *,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> GeneratedResponse:
    """Invoke ``client`` once and turn its first choice into a GeneratedResponse.

    ``timeout`` bounds the whole invocation in seconds and ``cancel`` aborts the
    wait as soon as it is set. There are no retries here.

    Raises:
        ContentGenerationError: the backend call failed, was cancelled or timed out.
        EmptyLLMResponseError: no response, no choices, or empty first choice.
        MalformedJSONError: the cleaned text is not JSON.
        InvalidJSONResponseError: the JSON lacks required fields. The cleaned
            text is available on the error's ``cleaned`` attribute.
    """

    log.debug(
        "Generating with %s/%s (temperature=%s, messages=%d)",
        getattr(client.provider, "value", client.provider),
        client.model,
        temperature,
        len(messages),
    )
    response = _invoke(client, messages, temperature, timeout=timeout, cancel=cancel)

    if response is None:
        raise NilResponseError()
    if not response.choices:
        raise NoChoicesError()
    content = response.choices[0].content
    if not content:
        raise EmptyContentError()

    cleaned = clean_response(content)
    try:
        return validate_response(cleaned)
    except LLMValidationError as e:
        log.warning("Rejected LLM output (%s): %s", e, cleaned)
        raise
