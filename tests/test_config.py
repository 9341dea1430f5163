import pytest

from promptgate.config import DEFAULT_ENDPOINTS, load_settings, sanitize_api_key
from promptgate.errors import ConfigError


def test_defaults_without_config():
    s = load_settings(environ={})
    assert s.endpoints == DEFAULT_ENDPOINTS
    assert s.timeout is None
    assert s.max_output_tokens == 4096
    assert s.default_model("reverse", "google") == "gemini-1.5-pro"
    assert s.credential_env["anthropic"] == "CLAUDE_API_KEY"


def test_yaml_overrides(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "endpoints:\n"
        "  openai: https://proxy.test/v1/chat/completions\n"
        "timeout: 30\n"
        "default_models:\n"
        "  expand:\n"
        "    openai: gpt-4o-mini\n",
        encoding="utf-8",
    )
    s = load_settings(p, environ={})
    assert s.endpoint("openai") == "https://proxy.test/v1/chat/completions"
    assert s.timeout == 30.0
    assert s.default_model("expand", "openai") == "gpt-4o-mini"
    # untouched use-case keeps its default
    assert s.default_model("reverse", "openai") == "gpt-4o"


def test_env_overrides_win(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("endpoints:\n  anthropic: https://from-yaml.test\n", encoding="utf-8")
    s = load_settings(
        environ={
            "PROMPTGATE_CONFIG": str(p),
            "ANTHROPIC_ENDPOINT": "https://from-env.test",
            "PROMPTGATE_TIMEOUT": "5",
        }
    )
    assert s.endpoint("anthropic") == "https://from-env.test"
    assert s.timeout == 5.0


def test_non_mapping_yaml_is_rejected(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(p, environ={})


def test_missing_config_file_falls_back_to_defaults(tmp_path):
    s = load_settings(tmp_path / "nope.yaml", environ={})
    assert s.endpoints == DEFAULT_ENDPOINTS


def test_sanitize_api_key():
    assert sanitize_api_key('  "sk-abc"  ') == "sk-abc"
    assert sanitize_api_key("“sk-abc”") == "sk-abc"
    assert sanitize_api_key(None) == ""


def test_image_credential_env_is_separate(tmp_path):
    s = load_settings(environ={})
    assert s.image_credential_env == "FAL_KEY"
    assert "fal" not in s.credential_env

    p = tmp_path / "config.yaml"
    p.write_text("image_credential_env: MY_FAL_KEY\n", encoding="utf-8")
    assert load_settings(p, environ={}).image_credential_env == "MY_FAL_KEY"
