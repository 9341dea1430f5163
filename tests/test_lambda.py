import json

import lambda_function
from promptgate.client import PromptClient
from promptgate.config import Settings
from promptgate.types import Success


class StubGateway:
    def __init__(self, text):
        self.text = text

    def call(self, request):
        return Success(self.text)


def _install(monkeypatch, text):
    client = PromptClient(settings=Settings(), gateway=StubGateway(text), environ={})
    monkeypatch.setattr(lambda_function, "_client", client)


def test_expand_via_api_gateway_path(monkeypatch):
    _install(monkeypatch, json.dumps({"expanded_prompt": "p", "scene": "s", "style": "x"}))
    event = {"rawPath": "/api/image/expand", "body": json.dumps({"prompt": "fox", "apiKey": "k"})}

    resp = lambda_function.lambda_handler(event, None)

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {
        "success": True,
        "expandedPrompt": {"expanded_prompt": "p", "scene": "s", "style": "x"},
    }


def test_failures_are_still_http_200(monkeypatch):
    _install(monkeypatch, "not json")
    event = {"action": "reverse", "imageBase64": "QUJD", "imageMimeType": "image/png", "apiKey": "k"}

    resp = lambda_function.lambda_handler(event, None)

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {"success": False, "error": "Could not parse AI response as JSON"}


def test_unknown_action(monkeypatch):
    _install(monkeypatch, "{}")
    resp = lambda_function.lambda_handler({"body": "{}"}, None)
    assert resp["statusCode"] == 200
    assert json.loads(resp["body"])["success"] is False
