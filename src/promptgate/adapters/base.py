"""Adapter interface for LLM providers.

Every adapter turns one ``LLMRequest`` into exactly one vendor call and one
``LLMResult``. Subclasses implement ``_complete`` and raise ``AdapterError``
subclasses; ``call`` maps those (and transport/JSON errors) to ``Failure`` so
nothing propagates to the gateway's caller. No retries.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

import requests

from ..errors import AdapterError, NetworkError, VendorError
from ..logging_util import get_logger
from ..types import Failure, LLMRequest, LLMResult, Success

logger = get_logger(__name__)


class ChatAdapter(Protocol):
    """Anything the gateway can dispatch a normalized request to."""

    name: str

    def call(self, request: LLMRequest) -> LLMResult:
        """Run one request; failures come back as ``Failure``, never raised."""


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def vendor_error_message(response: requests.Response, default: str) -> str:
    """Return ``error.message`` from a JSON error body, else ``default``."""
    try:
        body = response.json()
    except ValueError:
        return default
    if not isinstance(body, dict):
        return default
    err = body.get("error")
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return default


class BaseChatAdapter:
    name: str = ""
    vendor: str = ""
    default_model: str = ""

    def __init__(self, endpoint: str, timeout: Optional[float] = None):
        self.endpoint = endpoint
        self.timeout = timeout

    def call(self, request: LLMRequest) -> LLMResult:
        try:
            text = self._complete(request)
        except AdapterError as e:
            logger.warning("%s call failed: %s", self.vendor, e)
            return Failure(str(e))
        except requests.RequestException as e:
            logger.warning("%s request failed: %s", self.vendor, e)
            return Failure(str(e))
        except ValueError as e:
            # json decode on a 2xx body
            logger.warning("%s returned unparseable body: %s", self.vendor, e)
            return Failure(str(e))
        except (AttributeError, IndexError, KeyError, TypeError):
            logger.warning("%s returned an unexpected response shape", self.vendor)
            return Failure(f"No response from {self.vendor}")
        return Success(text)

    def _complete(self, request: LLMRequest) -> str:
        raise NotImplementedError

    def _post(
        self,
        url: str,
        headers: Dict[str, str],
        payload: Dict[str, Any],
        params: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        try:
            r = requests.post(url, headers=headers, params=params, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e

        if not is_success_status(r.status_code):
            raise VendorError(vendor_error_message(r, f"{self.vendor} API error"), status_code=r.status_code)

        data = r.json()
        if not isinstance(data, dict):
            raise VendorError(f"No response from {self.vendor}", status_code=r.status_code)
        return data

    def _no_content(self) -> VendorError:
        return VendorError(f"No response from {self.vendor}")
