"""promptgate: multi-vendor gateway that turns image ideas into structured prompts."""
from .client import PromptClient
from .coerce import extract_json
from .gateway import Gateway, call_llm
from .imagegen import ImageGenClient, fetch_models, generate_image
from .types import Failure, ImagePayload, LLMRequest, Success

__version__ = "0.1.0"

__all__ = [
    "Failure",
    "Gateway",
    "ImageGenClient",
    "ImagePayload",
    "LLMRequest",
    "PromptClient",
    "Success",
    "call_llm",
    "extract_json",
    "fetch_models",
    "generate_image",
]
