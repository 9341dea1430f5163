"""Prompt layer assembly.

Rules:
- System prompts are versioned text documents shipped in ``prompts/``; they
  pin the exact JSON schema the model must emit and carry worked examples.
- The expand user message is the user's text behind a fixed label.
- The reverse user message is a fixed instruction, optionally followed by
  caller-supplied context. The image itself travels on ``LLMRequest.image``.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from .errors import ConfigError

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

EXPANDER_PROMPT_VERSION = "v1"
REVERSE_PROMPT_VERSION = "v1"

EXPAND_LABEL = "User prompt to expand: "
REVERSE_INSTRUCTION = "Analyze this image and reverse-engineer the prompt that would recreate it."
REVERSE_INSTRUCTION_WITH_CONTEXT = (
    "Analyze this image and reverse-engineer the prompt. Additional context from user: {context}"
)


@lru_cache(maxsize=None)
def load_system_prompt(name: str, version: str) -> str:
    p = PROMPTS_DIR / f"{name}.{version}.txt"
    try:
        return p.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read system prompt {p.name}: {e}")


def expander_system_prompt() -> str:
    return load_system_prompt("image_expander", EXPANDER_PROMPT_VERSION)


def reverse_system_prompt() -> str:
    return load_system_prompt("image_reverse", REVERSE_PROMPT_VERSION)


def format_expand_message(prompt: str) -> str:
    return f"{EXPAND_LABEL}{prompt}"


def format_reverse_message(additional_context: Optional[str] = None) -> str:
    if additional_context:
        return REVERSE_INSTRUCTION_WITH_CONTEXT.format(context=additional_context)
    return REVERSE_INSTRUCTION
