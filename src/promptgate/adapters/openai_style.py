"""OpenAI-style chat.completions adapter."""
from __future__ import annotations

from typing import Any, Dict, List, Union

from ..types import LLMRequest
from .base import BaseChatAdapter


def _user_content(request: LLMRequest) -> Union[str, List[Dict[str, Any]]]:
    if request.image is None:
        return request.user_message
    # Text first, image second.
    return [
        {"type": "text", "text": request.user_message},
        {
            "type": "image_url",
            "image_url": {"url": f"data:{request.image.mime_type};base64,{request.image.data}"},
        },
    ]


class OpenAIStyleAdapter(BaseChatAdapter):
    name = "openai"
    vendor = "OpenAI"
    default_model = "gpt-4o"

    def build_payload(self, request: LLMRequest) -> Dict[str, Any]:
        return {
            "model": request.model or self.default_model,
            "max_tokens": request.max_tokens,
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": _user_content(request)},
            ],
        }

    def _complete(self, request: LLMRequest) -> str:
        headers = {
            "Authorization": f"Bearer {request.api_key}",
            "Content-Type": "application/json",
        }
        data = self._post(self.endpoint, headers, self.build_payload(request))

        choices = data.get("choices") or []
        msg = (choices[0].get("message") or {}) if choices else {}
        content = msg.get("content")
        if not content:
            raise self._no_content()
        return str(content)
