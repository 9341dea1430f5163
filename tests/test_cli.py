import json

from promptgate import cli
from promptgate.types import ImageGenResult


class FakeClient:
    last = None

    def __init__(self, settings):
        pass

    def expand(self, req):
        FakeClient.last = ("expand", req)
        return {"success": True, "expandedPrompt": {"expanded_prompt": "p"}}

    def reverse(self, req):
        FakeClient.last = ("reverse", req)
        return {"success": False, "error": "nope"}


def test_expand_builds_request(monkeypatch, capsys, clean_env):
    monkeypatch.setattr(cli, "PromptClient", FakeClient)

    code = cli.main(["expand", "a fox", "--provider", "google", "--api-key", "k"])

    assert code == 0
    assert FakeClient.last == ("expand", {"prompt": "a fox", "provider": "google", "apiKey": "k"})
    assert json.loads(capsys.readouterr().out)["success"] is True


def test_reverse_reads_and_encodes_image(monkeypatch, tmp_path, clean_env):
    monkeypatch.setattr(cli, "PromptClient", FakeClient)
    img = tmp_path / "pic.png"
    img.write_bytes(b"ABC")

    code = cli.main(["reverse", str(img), "--context", "poster"])

    assert code == 1
    _, req = FakeClient.last
    assert req == {"imageBase64": "QUJD", "imageMimeType": "image/png", "additionalContext": "poster"}


def test_reverse_rejects_non_image(tmp_path, clean_env):
    txt = tmp_path / "notes.txt"
    txt.write_text("hi", encoding="utf-8")
    assert cli.main(["reverse", str(txt)]) == 2


def test_generate_requires_key(clean_env):
    assert cli.main(["generate", "fox", "--model", "fal-ai/fast-sdxl"]) == 2


def test_generate_uses_env_key(monkeypatch, capsys, clean_env):
    seen = {}

    def fake_generate(self, req):
        seen["req"] = req
        return ImageGenResult(error="HTTP 401")

    monkeypatch.setenv("FAL_KEY", "fal-key")
    monkeypatch.setattr(cli.ImageGenClient, "generate", fake_generate)

    code = cli.main(["generate", "fox", "--model", "fal-ai/fast-sdxl", "--seed", "5"])

    assert code == 1
    assert seen["req"].api_key == "fal-key"
    assert seen["req"].seed == 5
    assert json.loads(capsys.readouterr().out) == {"success": False, "error": "HTTP 401"}


def test_request_file_must_hold_an_object(tmp_path, clean_env):
    req_file = tmp_path / "r.json"
    req_file.write_text("[1, 2]", encoding="utf-8")
    assert cli.main(["expand", "@" + str(req_file)]) == 2

    req_file.write_text("null", encoding="utf-8")
    assert cli.main(["reverse", "@" + str(req_file)]) == 2


def test_reverse_request_file_keeps_context(monkeypatch, tmp_path, clean_env):
    monkeypatch.setattr(cli, "PromptClient", FakeClient)
    req_file = tmp_path / "r.json"
    req_file.write_text(json.dumps({"imageBase64": "QUJD", "imageMimeType": "image/png"}), encoding="utf-8")

    cli.main(["reverse", "@" + str(req_file), "--context", "poster", "--provider", "openai"])

    _, req = FakeClient.last
    assert req == {
        "imageBase64": "QUJD",
        "imageMimeType": "image/png",
        "additionalContext": "poster",
        "provider": "openai",
    }
