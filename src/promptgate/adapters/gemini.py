"""Gemini REST adapter (generateContent)."""
from __future__ import annotations

from typing import Any, Dict, List

from ..types import LLMRequest
from .base import BaseChatAdapter


def _parts(request: LLMRequest) -> List[Dict[str, Any]]:
    parts: List[Dict[str, Any]] = []
    if request.image is not None:
        parts.append({"inline_data": {"mime_type": request.image.mime_type, "data": request.image.data}})
    parts.append({"text": request.user_message})
    return parts


class GeminiAdapter(BaseChatAdapter):
    name = "google"
    vendor = "Gemini"
    default_model = "gemini-1.5-pro"

    def build_url(self, request: LLMRequest) -> str:
        model = request.model or self.default_model
        return f"{self.endpoint.rstrip('/')}/{model}:generateContent"

    def build_payload(self, request: LLMRequest) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": request.system_prompt}]},
            "contents": [{"parts": _parts(request)}],
            "generationConfig": {"maxOutputTokens": request.max_tokens},
        }

    def _complete(self, request: LLMRequest) -> str:
        # Gemini takes the key as a query parameter, not a header.
        data = self._post(
            self.build_url(request),
            {"Content-Type": "application/json"},
            self.build_payload(request),
            params={"key": request.api_key},
        )

        candidates = data.get("candidates") or [{}]
        content = candidates[0].get("content") or {}
        parts = content.get("parts") or [{}]
        text = parts[0].get("text")
        if not text:
            raise self._no_content()
        return str(text)
