"""Anthropic messages adapter."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..types import LLMRequest
from .base import BaseChatAdapter


def _user_content(request: LLMRequest) -> List[Dict[str, Any]]:
    content: List[Dict[str, Any]] = []
    # Image block must precede the text block.
    if request.image is not None:
        content.append(
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": request.image.mime_type,
                    "data": request.image.data,
                },
            }
        )
    content.append({"type": "text", "text": request.user_message})
    return content


class AnthropicAdapter(BaseChatAdapter):
    name = "anthropic"
    vendor = "Anthropic"
    default_model = "claude-sonnet-4-20250514"

    def __init__(self, endpoint: str, timeout: Optional[float] = None, api_version: str = "2023-06-01"):
        super().__init__(endpoint, timeout)
        self.api_version = api_version

    def build_payload(self, request: LLMRequest) -> Dict[str, Any]:
        return {
            "model": request.model or self.default_model,
            "max_tokens": request.max_tokens,
            "system": request.system_prompt,
            "messages": [{"role": "user", "content": _user_content(request)}],
        }

    def _complete(self, request: LLMRequest) -> str:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": request.api_key,
            "anthropic-version": self.api_version,
        }
        data = self._post(self.endpoint, headers, self.build_payload(request))

        for block in data.get("content") or []:
            if isinstance(block, dict) and block.get("type") == "text":
                if block.get("text"):
                    return str(block["text"])
                break
        raise self._no_content()
