"""Provider dispatch.

``call_llm`` routes a normalized request to the adapter registered for its
provider tag. Adapters hold only immutable configuration, so one ``Gateway``
may serve concurrent requests.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional

from .adapters import AnthropicAdapter, GeminiAdapter, LocalAdapter, OpenAIStyleAdapter
from .adapters.base import ChatAdapter
from .config import Settings, load_settings
from .logging_util import get_logger
from .types import Failure, LLMRequest, LLMResult, Provider

logger = get_logger(__name__)

# Adding a vendor means adding one entry here.
ADAPTER_FACTORIES: Dict[Provider, Callable[[Settings], ChatAdapter]] = {
    "openai": lambda s: OpenAIStyleAdapter(endpoint=s.endpoint("openai"), timeout=s.timeout),
    "anthropic": lambda s: AnthropicAdapter(
        endpoint=s.endpoint("anthropic"), timeout=s.timeout, api_version=s.anthropic_version
    ),
    "google": lambda s: GeminiAdapter(endpoint=s.endpoint("gemini"), timeout=s.timeout),
    "local": lambda s: LocalAdapter(),
}


def build_adapters(settings: Settings) -> Dict[str, ChatAdapter]:
    return {name: factory(settings) for name, factory in ADAPTER_FACTORIES.items()}


class Gateway:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()
        self._adapters = build_adapters(self.settings)

    def call(self, request: LLMRequest) -> LLMResult:
        adapter = self._adapters.get(request.provider)
        if adapter is None:
            return Failure(f"Unknown provider: {request.provider}")

        logger.debug(
            "dispatch provider=%s model=%s image=%s",
            request.provider,
            request.model,
            request.image is not None,
        )
        return adapter.call(request)


def call_llm(request: LLMRequest, settings: Optional[Settings] = None) -> LLMResult:
    return Gateway(settings).call(request)
