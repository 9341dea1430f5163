"""Runtime configuration.

Resolution order (later wins):
1. built-in defaults below
2. optional YAML file (``load_settings(path)`` or ``PROMPTGATE_CONFIG``)
3. endpoint / timeout environment overrides

config.yaml supports:
- endpoints:
    openai: https://api.openai.com/v1/chat/completions
    fal_run: https://fal.run
- anthropic_version: "2023-06-01"
- timeout: 60
- max_output_tokens: 4096
- default_models:
    expand:
      anthropic: claude-sonnet-4-20250514
    reverse:
      google: gemini-1.5-pro
- credential_env:
    anthropic: CLAUDE_API_KEY
- image_credential_env: FAL_KEY
"""
from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .logging_util import get_logger

logger = get_logger(__name__)

DEFAULT_ENDPOINTS: Dict[str, str] = {
    "openai": "https://api.openai.com/v1/chat/completions",
    "anthropic": "https://api.anthropic.com/v1/messages",
    "gemini": "https://generativelanguage.googleapis.com/v1beta/models",
    "fal_models": "https://rest.fal.ai/models",
    "fal_run": "https://fal.run",
}

_ENDPOINT_ENV = {
    "openai": "OPENAI_ENDPOINT",
    "anthropic": "ANTHROPIC_ENDPOINT",
    "gemini": "GEMINI_ENDPOINT",
    "fal_models": "FAL_MODELS_ENDPOINT",
    "fal_run": "FAL_RUN_ENDPOINT",
}

# Both use-cases ship vision-capable defaults; keep them separate so a
# text-only model can be configured for "expand" without breaking "reverse".
DEFAULT_MODELS: Dict[str, Dict[str, str]] = {
    "expand": {
        "anthropic": "claude-sonnet-4-20250514",
        "openai": "gpt-4o",
        "google": "gemini-1.5-pro",
    },
    "reverse": {
        "anthropic": "claude-sonnet-4-20250514",
        "openai": "gpt-4o",
        "google": "gemini-1.5-pro",
    },
}

CREDENTIAL_ENV: Dict[str, str] = {
    "anthropic": "CLAUDE_API_KEY",
    "openai": "OPENAI_API_KEY",
    "google": "GOOGLE_API_KEY",
}

IMAGE_CREDENTIAL_ENV = "FAL_KEY"


@dataclass
class Settings:
    endpoints: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ENDPOINTS))
    anthropic_version: str = "2023-06-01"
    # None means no deadline; callers impose their own.
    timeout: Optional[float] = None
    max_output_tokens: int = 4096
    default_models: Dict[str, Dict[str, str]] = field(default_factory=lambda: copy.deepcopy(DEFAULT_MODELS))
    credential_env: Dict[str, str] = field(default_factory=lambda: dict(CREDENTIAL_ENV))
    image_credential_env: str = IMAGE_CREDENTIAL_ENV

    def endpoint(self, name: str) -> str:
        return self.endpoints.get(name) or DEFAULT_ENDPOINTS[name]

    def default_model(self, use_case: str, provider: str) -> Optional[str]:
        return (self.default_models.get(use_case) or {}).get(provider)


def sanitize_api_key(raw: Optional[str]) -> str:
    """Strip whitespace and stray quotes left over from copy/paste."""
    k = (raw or "").strip()
    k = k.strip(' "\'`')
    k = k.strip("“”‘’")
    return k


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load YAML: %s (%s)", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return data


def _to_timeout(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    try:
        t = float(v)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid timeout: {v!r}")
    return t if t > 0 else None


def _apply_overrides(settings: Settings, data: Mapping[str, Any]) -> None:
    endpoints = data.get("endpoints") or {}
    if isinstance(endpoints, dict):
        settings.endpoints.update({k: str(v) for k, v in endpoints.items() if v})

    if data.get("anthropic_version"):
        settings.anthropic_version = str(data["anthropic_version"])

    if "timeout" in data:
        settings.timeout = _to_timeout(data.get("timeout"))

    if data.get("max_output_tokens") is not None:
        try:
            settings.max_output_tokens = int(data["max_output_tokens"])
        except (TypeError, ValueError):
            raise ConfigError(f"invalid max_output_tokens: {data['max_output_tokens']!r}")

    models = data.get("default_models") or {}
    if isinstance(models, dict):
        for use_case, per_provider in models.items():
            if isinstance(per_provider, dict):
                settings.default_models.setdefault(use_case, {}).update(
                    {k: str(v) for k, v in per_provider.items() if v}
                )

    cred_env = data.get("credential_env") or {}
    if isinstance(cred_env, dict):
        settings.credential_env.update({k: str(v) for k, v in cred_env.items() if v})

    if data.get("image_credential_env"):
        settings.image_credential_env = str(data["image_credential_env"])


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    settings = Settings()

    cfg_path = path or (env.get("PROMPTGATE_CONFIG") or "").strip()
    if cfg_path:
        _apply_overrides(settings, _load_yaml(Path(cfg_path)))

    for name, var in _ENDPOINT_ENV.items():
        v = (env.get(var) or "").strip()
        if v:
            settings.endpoints[name] = v

    if (env.get("PROMPTGATE_TIMEOUT") or "").strip():
        settings.timeout = _to_timeout(env["PROMPTGATE_TIMEOUT"].strip())

    return settings
