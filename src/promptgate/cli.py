"""Simple CLI.

Usage examples:
- Expand a short idea:
  promptgate expand "a cat astronaut" --provider openai --pretty

- Reverse-engineer an image:
  promptgate reverse ./photo.jpg --context "film still"

- Request JSON from a file (prefix with @):
  promptgate expand @request.json

- List image models / generate:
  promptgate models
  promptgate generate "neon city" --model fal-ai/fast-sdxl --size landscape_16_9

Notes:
- Single call executor: no retries, no fallback providers.
- Exit code 0 on success, 1 on a failure envelope, 2 on unusable input.
"""
from __future__ import annotations

import argparse
import base64
import json
import mimetypes
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .client import PromptClient
from .config import load_settings, sanitize_api_key
from .imagegen import IMAGE_SIZES, ImageGenClient
from .logging_util import get_logger
from .types import ImageGenRequest

logger = get_logger(__name__)


def _load_request(spec: str) -> Optional[Dict[str, Any]]:
    """Return a request dict for '@file.json' input, else None."""
    if not spec.startswith("@"):
        return None
    p = Path(spec[1:])
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("request file must contain a JSON object")
    return data


def _image_request(path: Path) -> Dict[str, Any]:
    mime, _ = mimetypes.guess_type(path.name)
    if not mime or not mime.startswith("image/"):
        raise ValueError(f"not an image file: {path}")
    return {
        "imageBase64": base64.b64encode(path.read_bytes()).decode("ascii"),
        "imageMimeType": mime,
    }


def _common_fields(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if args.provider:
        out["provider"] = args.provider
    if args.model:
        out["model"] = args.model
    if args.api_key:
        out["apiKey"] = args.api_key
    return out


def _emit(out: Any, pretty: bool):
    if pretty:
        print(json.dumps(out, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(out, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="promptgate")
    ap.add_argument("--config", help="Path to a YAML config file")
    sub = ap.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser):
        p.add_argument("--provider", help="openai | anthropic | google")
        p.add_argument("--model", help="Model id (defaults per provider)")
        p.add_argument("--api-key", dest="api_key", help="API key (falls back to env)")
        p.add_argument("--pretty", action="store_true", help="Pretty print the output JSON")

    p_exp = sub.add_parser("expand", help="Expand a short prompt into a structured prompt")
    p_exp.add_argument("input", help="Prompt text or @path/to/request.json")
    add_common(p_exp)

    p_rev = sub.add_parser("reverse", help="Reverse-engineer a prompt from an image")
    p_rev.add_argument("input", help="Image path or @path/to/request.json")
    p_rev.add_argument("--context", help="Additional context for the analysis")
    add_common(p_rev)

    p_models = sub.add_parser("models", help="List image generation models")
    p_models.add_argument("--api-key", dest="api_key", help="fal.ai key (falls back to FAL_KEY)")
    p_models.add_argument("--pretty", action="store_true")

    p_gen = sub.add_parser("generate", help="Generate images from a prompt")
    p_gen.add_argument("prompt")
    p_gen.add_argument("--model", required=True)
    p_gen.add_argument("--negative", help="Negative prompt")
    p_gen.add_argument("--size", choices=[v for v, _ in IMAGE_SIZES])
    p_gen.add_argument("--num-images", dest="num_images", type=int)
    p_gen.add_argument("--seed", type=int)
    p_gen.add_argument("--api-key", dest="api_key", help="fal.ai key (falls back to FAL_KEY)")
    p_gen.add_argument("--pretty", action="store_true")

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(Path(args.config) if args.config else None)

    if args.command in ("models", "generate"):
        client = ImageGenClient(settings)
        api_key = sanitize_api_key(args.api_key or os.environ.get(settings.image_credential_env))
        if args.command == "models":
            _emit([m.to_dict() for m in client.list_models(api_key or None)], args.pretty)
            return 0
        if not api_key:
            logger.error("fal.ai API key not provided")
            return 2
        result = client.generate(
            ImageGenRequest(
                api_key=api_key,
                model=args.model,
                prompt=args.prompt,
                negative_prompt=args.negative,
                image_size=args.size,
                num_images=args.num_images,
                seed=args.seed,
            )
        )
        _emit(result.to_dict(), args.pretty)
        return 0 if result.success else 1

    try:
        req = _load_request(args.input)
        if req is None:
            if args.command == "expand":
                req = {"prompt": args.input}
            else:
                req = _image_request(Path(args.input))
        if args.command == "reverse" and args.context:
            req["additionalContext"] = args.context
        req.update(_common_fields(args))
    except (OSError, ValueError) as e:
        logger.error("Failed to parse input: %s", e)
        return 2

    client = PromptClient(settings)
    out = client.expand(req) if args.command == "expand" else client.reverse(req)
    _emit(out, args.pretty)
    return 0 if out.get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
