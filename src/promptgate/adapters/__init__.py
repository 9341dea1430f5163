from .anthropic import AnthropicAdapter
from .base import BaseChatAdapter
from .gemini import GeminiAdapter
from .local import LOCAL_PROVIDER_MESSAGE, LocalAdapter
from .openai_style import OpenAIStyleAdapter

__all__ = [
    "AnthropicAdapter",
    "BaseChatAdapter",
    "GeminiAdapter",
    "LOCAL_PROVIDER_MESSAGE",
    "LocalAdapter",
    "OpenAIStyleAdapter",
]
