"""Required-field validation for structured image prompts.

Only the provider-agnostic subset is checked; every other field is passed
through exactly as the model produced it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

EXPANDED_REQUIRED: Tuple[str, ...] = ("expanded_prompt", "scene", "style")
REVERSED_REQUIRED: Tuple[str, ...] = ("reverse_prompt", "scene", "style")

REQUIRED_FIELDS: Dict[str, Tuple[str, ...]] = {
    "expand": EXPANDED_REQUIRED,
    "reverse": REVERSED_REQUIRED,
}


@dataclass(frozen=True)
class SchemaIssue:
    field: str
    problem: str  # "missing" | "empty" | "not_object"

    def __str__(self) -> str:
        return f"{self.field}: {self.problem}"


def validate_required(obj: Any, required: Sequence[str]) -> List[SchemaIssue]:
    if not isinstance(obj, dict):
        return [SchemaIssue(field="$", problem="not_object")]

    issues: List[SchemaIssue] = []
    for name in required:
        if name not in obj or obj[name] is None:
            issues.append(SchemaIssue(field=name, problem="missing"))
        elif not obj[name]:
            issues.append(SchemaIssue(field=name, problem="empty"))
    return issues


def validate_prompt(obj: Any, use_case: str) -> List[SchemaIssue]:
    return validate_required(obj, REQUIRED_FIELDS[use_case])
