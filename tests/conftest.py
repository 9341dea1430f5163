import json

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class Recorder:
    """Stands in for requests.post / requests.get and remembers each call."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return self.response

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def fake_post(monkeypatch):
    def install(response=None, exc=None):
        rec = Recorder(response, exc)
        monkeypatch.setattr(requests, "post", rec)
        return rec

    return install


@pytest.fixture
def fake_get(monkeypatch):
    def install(response=None, exc=None):
        rec = Recorder(response, exc)
        monkeypatch.setattr(requests, "get", rec)
        return rec

    return install


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("CLAUDE_API_KEY", "OPENAI_API_KEY", "GOOGLE_API_KEY", "FAL_KEY", "PROMPTGATE_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
