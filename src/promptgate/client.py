"""PromptClient: request orchestrator for the expand and reverse use-cases.

Both use-cases run the same pipeline:
  parse input -> resolve credential -> resolve model -> assemble messages
  -> gateway call -> extract JSON -> required-field check -> envelope

Envelopes:
  {"success": True, "expandedPrompt" | "reversedPrompt": {...}}
  {"success": False, "error": "..."}

Every failure is returned, never raised. Envelopes carry no timing or request
ids so identical inputs and vendor replies give identical envelopes.
"""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from .coerce import extract_json
from .config import Settings, load_settings, sanitize_api_key
from .errors import CredentialError, ExtractionError, PromptGateError, SchemaError, VendorError
from .gateway import Gateway
from .input_spec import parse_expand, parse_reverse
from .logging_util import get_logger, key_fingerprint, log_step
from .prompt_layers import (
    expander_system_prompt,
    format_expand_message,
    format_reverse_message,
    reverse_system_prompt,
)
from .schema import validate_prompt
from .types import ImagePayload, LLMRequest, Success

logger = get_logger(__name__)

NO_RESPONSE = "No response from AI"
UNPARSEABLE = "Could not parse AI response as JSON"


@dataclass(frozen=True)
class UseCase:
    name: str
    result_key: str
    label: str  # used in "Invalid <label> prompt structure"
    parse: Callable[[Dict[str, Any]], Any]
    system_prompt: Callable[[], str]


EXPAND = UseCase(
    name="expand",
    result_key="expandedPrompt",
    label="expanded",
    parse=parse_expand,
    system_prompt=expander_system_prompt,
)

REVERSE = UseCase(
    name="reverse",
    result_key="reversedPrompt",
    label="reversed",
    parse=parse_reverse,
    system_prompt=reverse_system_prompt,
)


def resolve_api_key(
    provider: str,
    explicit: Optional[str],
    settings: Settings,
    environ: Mapping[str, str],
) -> str:
    key = sanitize_api_key(explicit)
    if key:
        return key

    env_name = settings.credential_env.get(provider)
    if env_name:
        key = sanitize_api_key(environ.get(env_name))
        if key:
            return key

    raise CredentialError(f"API key not provided for {provider}. Please set up your API key in settings.")


def resolve_model(use_case: str, provider: str, explicit: Optional[str], settings: Settings) -> str:
    if explicit:
        return explicit
    return settings.default_model(use_case, provider) or ""


def _fail(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


class PromptClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        gateway: Optional[Gateway] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.settings = settings or load_settings()
        self.gateway = gateway or Gateway(self.settings)
        # Read per request; None means the live process environment.
        self._environ = environ

    def expand(self, req: Dict[str, Any]) -> Dict[str, Any]:
        return self._run(EXPAND, req)

    def reverse(self, req: Dict[str, Any]) -> Dict[str, Any]:
        return self._run(REVERSE, req)

    def _run(self, use_case: UseCase, req: Dict[str, Any]) -> Dict[str, Any]:
        t0 = time.time()
        try:
            log_step(logger, "1", f"{use_case.name}: parse input")
            spec = use_case.parse(req)

            log_step(logger, "2", "resolve credential and model")
            environ = os.environ if self._environ is None else self._environ
            api_key = resolve_api_key(spec.provider, spec.api_key, self.settings, environ)
            logger.debug("credential provider=%s %s", spec.provider, key_fingerprint(api_key))
            model = resolve_model(use_case.name, spec.provider, spec.model, self.settings)

            log_step(logger, "3", "assemble messages")
            llm_request = self._build_request(use_case, spec, model, api_key)

            log_step(logger, "4", f"call provider={spec.provider} model={model}")
            t_call = time.time()
            result = self.gateway.call(llm_request)
            logger.info("provider call took %d ms", int((time.time() - t_call) * 1000))
            if not isinstance(result, Success) or not result.text:
                raise VendorError(getattr(result, "message", "") or NO_RESPONSE)

            log_step(logger, "5", "extract and validate JSON")
            parsed = extract_json(result.text)
            if parsed is None:
                raise ExtractionError(UNPARSEABLE)

            issues = validate_prompt(parsed, use_case.name)
            if issues:
                logger.warning(
                    "%s prompt failed validation: %s", use_case.label, ", ".join(str(i) for i in issues)
                )
                raise SchemaError(f"Invalid {use_case.label} prompt structure", issues)

            logger.info("%s done in %d ms", use_case.name, int((time.time() - t0) * 1000))
            return {"success": True, use_case.result_key: parsed}

        except PromptGateError as e:
            logger.info("%s failed (%s): %s", use_case.name, type(e).__name__, e)
            return _fail(str(e))
        except Exception as e:
            logger.exception("PromptClient.%s failed: %s", use_case.name, e)
            return _fail(str(e) or "Unknown error")

    def _build_request(self, use_case: UseCase, spec: Any, model: str, api_key: str) -> LLMRequest:
        image: Optional[ImagePayload] = None
        if use_case is REVERSE:
            user_message = format_reverse_message(spec.additional_context)
            image = spec.image
        else:
            user_message = format_expand_message(spec.prompt)

        return LLMRequest(
            provider=spec.provider,
            model=model,
            api_key=api_key,
            system_prompt=use_case.system_prompt(),
            user_message=user_message,
            max_tokens=self.settings.max_output_tokens,
            image=image,
        )
