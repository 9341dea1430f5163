"""Local-execution provider.

Requests for this provider are run by a desktop-shell collaborator on the
user's machine; the gateway only answers with a uniform failure.
"""
from __future__ import annotations

from ..types import Failure, LLMRequest, LLMResult

LOCAL_PROVIDER_MESSAGE = "Local provider must be executed by a local-execution collaborator"


class LocalAdapter:
    name = "local"

    def call(self, request: LLMRequest) -> LLMResult:
        return Failure(LOCAL_PROVIDER_MESSAGE)
