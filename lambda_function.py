"""AWS Lambda entrypoint.

Design goals:
- Keep this file small and stable.
- Delegate all real logic to promptgate so the same code serves CLI and Lambda.

Expected event shapes (minimal):
1) API Gateway (path picks the use-case, body is a JSON string):
   {"rawPath": "/api/image/expand", "body": "{\"prompt\":\"a red fox\"}"}

2) Direct invoke / local test (event itself is the JSON dict, "action" picks the use-case):
   {"action": "reverse", "imageBase64": "...", "imageMimeType": "image/png"}

Return:
- statusCode: always 200; failure is signalled in the body
- body: JSON string of {"success": true, "expandedPrompt" | "reversedPrompt": ...}
        or {"success": false, "error": "..."}
"""
import json
from typing import Any, Dict, Optional

from promptgate.client import PromptClient
from promptgate.logging_util import get_logger

logger = get_logger(__name__)

_client: Optional[PromptClient] = None


def _get_client() -> PromptClient:
    global _client
    if _client is None:
        _client = PromptClient()
    return _client


def _safe_json_loads(s: Any) -> Dict[str, Any]:
    if isinstance(s, dict):
        return s
    if not isinstance(s, str):
        return {}
    s = s.strip()
    if not s:
        return {}
    try:
        data = json.loads(s)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _action(event: Dict[str, Any], req: Dict[str, Any]) -> str:
    path = event.get("rawPath") or event.get("path") or ""
    if isinstance(path, str) and path.rstrip("/"):
        return path.rstrip("/").rsplit("/", 1)[-1]
    return str(req.get("action") or event.get("action") or "")


def _response(body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def lambda_handler(event: Dict[str, Any], context: Any):
    try:
        body = event.get("body", event)
        req = _safe_json_loads(body)
        action = _action(event, req)

        if action == "expand":
            return _response(_get_client().expand(req))
        if action == "reverse":
            return _response(_get_client().reverse(req))
        return _response({"success": False, "error": f"Unknown action: {action or '(none)'}"})

    except Exception as e:
        logger.exception("lambda_handler fatal error: %s", e)
        return _response({"success": False, "error": str(e)})
