import sys
import threading
from pathlib import Path

import pytest


def pytest_configure():
    # This repo uses a src/ layout, so when running tests without an editable
    # install, we add <repo>/src to sys.path.
    repo_root = Path(__file__).resolve().parents[2]
    src_path = str(repo_root / "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


class FakeClient:
    """ModelClient stand-in that replays a scripted result.

    ``result`` is returned as-is; an exception instance is raised instead.
    When ``gate`` is given the call blocks until it is set.
    """

    def __init__(self, result=None, *, provider="openai", gate=None):
        from honeyllm.llm.types import Provider

        self.provider = Provider.parse(provider)
        self.model = "fake-model"
        self.result = result
        self.gate = gate
        self.calls = []

    def generate_content(self, messages, *, temperature, timeout=None):
        self.calls.append(
            {"messages": list(messages), "temperature": temperature, "timeout": timeout}
        )
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


@pytest.fixture
def fake_client():
    """Factory: build a FakeClient returning the given first-choice text."""

    def _factory(text=None, **kwargs):
        from honeyllm.llm.types import Choice, Completion

        result = kwargs.pop("result", None)
        if result is None and text is not None:
            result = Completion(choices=[Choice(content=text)])
        return FakeClient(result, **kwargs)

    return _factory


@pytest.fixture
def gate():
    """An Event released at teardown so no worker thread stays blocked."""
    ev = threading.Event()
    yield ev
    ev.set()


@pytest.fixture
def sample_request():
    from honeyllm.http_request import HTTPRequest

    return HTTPRequest(
        method="POST",
        target="/login?next=%2Fadmin",
        headers=[
            ("Host", "example.test"),
            ("User-Agent", "curl/8.0"),
            ("Content-Type", "application/x-www-form-urlencoded"),
            ("Content-Length", "17"),
        ],
        body=b"user=root&pass=pw",
    )
