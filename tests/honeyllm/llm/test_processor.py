import threading
import time

import pytest

from honeyllm.llm import errors
from honeyllm.llm.processor import clean_response, generate_response, validate_response
from honeyllm.llm.types import Choice, Completion, LLMMessage

MESSAGES = [
    LLMMessage(role="system", content="sys"),
    LLMMessage(role="human", content="GET / HTTP/1.1"),
]


# =====================================================
# clean_response
# =====================================================


def test_clean_response_strips_json_fence():
    raw = '```json\n{"headers":{"a":"b"},"body":"x"}\n```'
    assert clean_response(raw) == '{"headers":{"a":"b"},"body":"x"}'


def test_clean_response_strips_untagged_fence_and_whitespace():
    assert clean_response('  \n```\n{"a": 1}\n```  ') == '{"a": 1}'
    assert clean_response('```\n{"a": 1}\n```') == '{"a": 1}'
    assert clean_response('   {"a": 1}\n') == '{"a": 1}'


def test_clean_response_is_a_single_pass():
    # The leading tag is only removed when the fence opens the text.
    assert clean_response(' ```json\n{}\n```') == "json\n{}"
    # A nested tagged fence keeps its tag.
    assert clean_response("``````json{}") == "json{}"


# =====================================================
# validate_response
# =====================================================


def test_validate_response_success():
    resp = validate_response('{"headers":{"Server":"nginx"},"body":""}')
    assert resp.headers == {"Server": "nginx"}
    assert resp.body == ""
    assert resp.as_dict() == {"headers": {"Server": "nginx"}, "body": ""}


def test_validate_response_ignores_extra_fields():
    resp = validate_response('{"headers":{"a":"b"},"body":"x","status":200}')
    assert resp.body == "x"


@pytest.mark.parametrize(
    "text",
    [
        '{"headers":{}}',
        '{"headers":{},"body":"x"}',
        '{"headers":{"a":"b"}}',
        '{"headers":{"a":1},"body":"x"}',
        '{"headers":{"a":"b"},"body":null}',
        '["headers", "body"]',
    ],
)
def test_validate_response_rejects_incomplete_documents(text):
    with pytest.raises(errors.InvalidJSONResponseError) as exc:
        validate_response(text)
    assert exc.value.cleaned == text


def test_validate_response_rejects_non_json():
    with pytest.raises(errors.MalformedJSONError):
        validate_response("not json")


# =====================================================
# generate_response
# =====================================================


def test_generate_response_success(fake_client):
    client = fake_client('```json\n{"headers":{"a":"b"},"body":"x"}\n```')

    resp = generate_response(client, 0.7, MESSAGES)

    assert resp.headers == {"a": "b"}
    assert resp.body == "x"
    assert resp.raw_text == '{"headers":{"a":"b"},"body":"x"}'
    assert client.calls[0]["temperature"] == 0.7
    assert client.calls[0]["messages"] == MESSAGES


def test_generate_response_uses_first_choice(fake_client):
    client = fake_client(
        result=Completion(
            choices=[
                Choice(content='{"headers":{"n":"1"},"body":"first"}'),
                Choice(content='{"headers":{"n":"2"},"body":"second"}'),
            ]
        )
    )
    assert generate_response(client, 0.0, MESSAGES).body == "first"


def test_generate_response_malformed_json(fake_client):
    with pytest.raises(errors.MalformedJSONError) as exc:
        generate_response(fake_client("not json"), 1.0, MESSAGES)
    assert exc.value.cleaned == "not json"


def test_generate_response_invalid_json_keeps_cleaned_text(fake_client):
    with pytest.raises(errors.InvalidJSONResponseError) as exc:
        generate_response(fake_client('{"headers":{}}'), 1.0, MESSAGES)
    assert exc.value.cleaned == '{"headers":{}}'


def test_generate_response_empty_variants_are_distinct(fake_client):
    with pytest.raises(errors.NilResponseError) as nil_exc:
        generate_response(fake_client(result=None), 1.0, MESSAGES)
    with pytest.raises(errors.NoChoicesError) as none_exc:
        generate_response(fake_client(result=Completion(choices=[])), 1.0, MESSAGES)
    with pytest.raises(errors.EmptyContentError) as empty_exc:
        generate_response(fake_client(""), 1.0, MESSAGES)

    found = [nil_exc.value, none_exc.value, empty_exc.value]
    assert all(isinstance(e, errors.EmptyLLMResponseError) for e in found)
    assert len({str(e) for e in found}) == 3
    assert "no choices" in str(none_exc.value)


def test_generate_response_wraps_backend_failure(fake_client):
    boom = ConnectionError("connection reset")

    with pytest.raises(errors.ContentGenerationError) as exc:
        generate_response(fake_client(result=boom), 1.0, MESSAGES)

    assert exc.value.__cause__ is boom
    assert "connection reset" in str(exc.value)
    assert not isinstance(exc.value, errors.GenerationCancelledError)


def test_generate_response_backend_timeout_error_is_not_a_hang(fake_client):
    # A TimeoutError raised by the SDK is a backend failure, reported once.
    with pytest.raises(errors.ContentGenerationError):
        generate_response(fake_client(result=TimeoutError("read timeout")), 1.0, MESSAGES)


def test_generate_response_passes_timeout_to_client(fake_client):
    client = fake_client('{"headers":{"a":"b"},"body":""}')
    generate_response(client, 1.0, MESSAGES, timeout=5)
    # The client gets what is left of the deadline.
    assert 4.0 < client.calls[0]["timeout"] <= 5


def test_generate_response_cancelled_before_invocation(fake_client):
    client = fake_client('{"headers":{"a":"b"},"body":""}')
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(errors.GenerationCancelledError):
        generate_response(client, 1.0, MESSAGES, cancel=cancel)
    assert client.calls == []


def test_generate_response_cancelled_while_waiting(fake_client, gate):
    client = fake_client('{"headers":{"a":"b"},"body":""}', gate=gate)
    cancel = threading.Event()
    threading.Timer(0.1, cancel.set).start()

    start = time.monotonic()
    with pytest.raises(errors.GenerationCancelledError):
        generate_response(client, 1.0, MESSAGES, cancel=cancel)

    assert time.monotonic() - start < 2.0


def test_generate_response_deadline_exceeded(fake_client, gate):
    client = fake_client('{"headers":{"a":"b"},"body":""}', gate=gate)

    start = time.monotonic()
    with pytest.raises(errors.GenerationTimeoutError):
        generate_response(client, 1.0, MESSAGES, timeout=0.1)

    assert time.monotonic() - start < 2.0


def test_abandoned_calls_do_not_starve_later_calls(fake_client, gate):
    stuck = fake_client('{"headers":{"a":"b"},"body":""}', gate=gate)

    for i in range(40):
        if i % 2:
            with pytest.raises(errors.GenerationTimeoutError):
                generate_response(stuck, 1.0, MESSAGES, timeout=0.01)
        else:
            pending = threading.Event()
            threading.Timer(0.01, pending.set).start()
            with pytest.raises(errors.GenerationCancelledError):
                generate_response(stuck, 1.0, MESSAGES, cancel=pending)

    healthy = fake_client('{"headers":{"a":"b"},"body":"ok"}')
    resp = generate_response(healthy, 1.0, MESSAGES, timeout=1.0)

    assert resp.body == "ok"
    assert len(healthy.calls) == 1


def test_generate_response_logs_rejected_output(fake_client, monkeypatch):
    from honeyllm.llm import processor

    calls = []
    monkeypatch.setattr(processor.log, "warning", lambda *a: calls.append(a))

    with pytest.raises(errors.InvalidJSONResponseError):
        generate_response(fake_client('{"body":"x"}'), 1.0, MESSAGES)

    assert calls and calls[0][-1] == '{"body":"x"}'
