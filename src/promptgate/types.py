"""Shared types and lightweight data containers.

Everything here is a value that lives for a single request. We keep to plain
dataclasses so the gateway stays portable and easy to fake in tests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

Provider = Literal["openai", "anthropic", "google", "local"]


@dataclass(frozen=True)
class ImagePayload:
    data: str  # base64, no data-URI prefix
    mime_type: str


@dataclass(frozen=True)
class LLMRequest:
    provider: str
    model: str
    api_key: str
    system_prompt: str
    user_message: str
    max_tokens: int = 4096
    # Only set for vision requests.
    image: Optional[ImagePayload] = None


@dataclass(frozen=True)
class Success:
    text: str
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Failure:
    message: str
    success: bool = field(default=False, init=False)


LLMResult = Union[Success, Failure]


@dataclass
class ExpandSpec:
    prompt: str
    provider: str
    model: Optional[str] = None
    api_key: Optional[str] = None


@dataclass
class ReverseSpec:
    image: ImagePayload
    provider: str
    model: Optional[str] = None
    api_key: Optional[str] = None
    additional_context: Optional[str] = None


@dataclass(frozen=True)
class ModelDescriptor:
    id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.description is not None:
            out["description"] = self.description
        if self.category is not None:
            out["category"] = self.category
        return out


@dataclass
class ImageGenRequest:
    api_key: str
    model: str
    prompt: str
    negative_prompt: Optional[str] = None
    image_size: Optional[str] = None
    num_images: Optional[int] = None
    seed: Optional[int] = None


@dataclass(frozen=True)
class GeneratedImage:
    url: str
    content_type: str


@dataclass
class ImageGenResult:
    images: List[GeneratedImage] = field(default_factory=list)
    seed: Optional[int] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"success": False, "error": self.error}
        out: Dict[str, Any] = {
            "success": True,
            "images": [{"url": i.url, "content_type": i.content_type} for i in self.images],
        }
        if self.seed is not None:
            out["seed"] = self.seed
        return out
