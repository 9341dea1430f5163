"""Structured extraction from free-text model output.

Rules:
- Take the widest span from the first '{' to the last '}' and parse it once.
- On any parse failure return None; never raise.
- No repair. Replies with several unrelated brace spans are ambiguous: we log
  them so they can be told apart from plain garbage, but do not try to pick one.

Callers must still validate required fields on the result.
"""
from __future__ import annotations

import json
import re
from typing import Any, Optional

from .logging_util import get_logger

logger = get_logger(__name__)

_OBJECT_SPAN = re.compile(r"\{.*\}", flags=re.DOTALL)


def count_top_level_spans(text: str) -> int:
    """Rough count of balanced top-level ``{...}`` spans (ignores braces in strings)."""
    depth = 0
    spans = 0
    for ch in text:
        if ch == "{":
            if depth == 0:
                spans += 1
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
    return spans


def extract_json(text: Optional[str]) -> Optional[Any]:
    if not text:
        return None

    m = _OBJECT_SPAN.search(text)
    if not m:
        logger.debug("no JSON object braces found")
        return None

    try:
        return json.loads(m.group(0))
    except ValueError as e:
        spans = count_top_level_spans(text)
        if spans > 1:
            logger.debug("json parse failed; reply has %d top-level brace spans (ambiguous)", spans)
        else:
            logger.debug("json parse failed after extraction: %s", e)
        return None
