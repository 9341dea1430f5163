"""Error taxonomy.

None of these reach the caller of the public entry points: adapters turn them
into ``Failure`` results and the orchestrator turns them into the
``{"success": False, "error": ...}`` envelope.
"""
from __future__ import annotations

from typing import List, Optional


class PromptGateError(Exception):
    pass


class ConfigError(PromptGateError):
    pass


class ValidationError(PromptGateError):
    pass


class CredentialError(PromptGateError):
    pass


class AdapterError(PromptGateError):
    pass


class VendorError(AdapterError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(AdapterError):
    pass


class ExtractionError(PromptGateError):
    pass


class SchemaError(PromptGateError):
    def __init__(self, message: str, issues: Optional[List] = None):
        super().__init__(message)
        self.issues = list(issues or [])
