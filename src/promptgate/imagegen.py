"""Image generation gateway (fal.ai REST).

Two calls:
- ``list_models``: remote catalog, falling back to a curated list on any
  failure. Fallbacks are logged and counted on ``fallback_count`` so they can
  be told apart from a genuinely small remote catalog.
- ``generate``: one synchronous generation call (``sync_mode``), no polling.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import requests

from .adapters.base import is_success_status
from .config import Settings, load_settings
from .logging_util import get_logger
from .types import GeneratedImage, ImageGenRequest, ImageGenResult, ModelDescriptor

logger = get_logger(__name__)

POPULAR_MODELS: Tuple[ModelDescriptor, ...] = (
    ModelDescriptor("fal-ai/flux-2-pro", "FLUX 2 Pro", "Latest FLUX model, maximum quality"),
    ModelDescriptor("fal-ai/nano-banana-pro", "Nano Banana Pro", "Fast, high-quality image generation"),
    ModelDescriptor("fal-ai/fast-sdxl", "Fast SDXL", "Fast Stable Diffusion XL"),
    ModelDescriptor("fal-ai/fast-lightning-sdxl", "Lightning SDXL", "Ultra-fast SDXL"),
    ModelDescriptor("fal-ai/hyper-sdxl", "Hyper SDXL", "Improved SDXL"),
)

IMAGE_SIZES: Tuple[Tuple[str, str], ...] = (
    ("square_hd", "1024x1024 (Square HD)"),
    ("square", "512x512 (Square)"),
    ("portrait_4_3", "768x1024 (Portrait 4:3)"),
    ("portrait_16_9", "576x1024 (Portrait 16:9)"),
    ("landscape_4_3", "1024x768 (Landscape 4:3)"),
    ("landscape_16_9", "1024x576 (Landscape 16:9)"),
)

DEFAULT_IMAGE_SIZE = "square_hd"
DEFAULT_NUM_IMAGES = 1
MODEL_CATEGORY = "image"


def _descriptor_from_remote(m: Dict[str, Any]) -> ModelDescriptor:
    endpoint_id = str(m["endpoint_id"])
    name = m.get("name") or endpoint_id.split("/")[-1] or endpoint_id
    return ModelDescriptor(
        id=endpoint_id,
        name=str(name),
        description=m.get("description"),
        category=m.get("category"),
    )


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
        if detail:
            return detail if isinstance(detail, str) else str(detail)
    return f"HTTP {response.status_code}"


def _to_image(raw: Any) -> GeneratedImage:
    if isinstance(raw, str):
        return GeneratedImage(url=raw, content_type="")
    return GeneratedImage(url=str(raw.get("url") or ""), content_type=str(raw.get("content_type") or ""))


class ImageGenClient:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()
        self.fallback_count = 0

    def _headers(self, api_key: Optional[str]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Key {api_key}"
        return headers

    def _fallback(self, reason: str) -> List[ModelDescriptor]:
        self.fallback_count += 1
        logger.warning("model discovery failed (%s); using curated list", reason)
        return list(POPULAR_MODELS)

    def list_models(self, api_key: Optional[str] = None) -> List[ModelDescriptor]:
        try:
            r = requests.get(
                self.settings.endpoint("fal_models"),
                headers=self._headers(api_key),
                params={"category": MODEL_CATEGORY},
                timeout=self.settings.timeout,
            )
            if not is_success_status(r.status_code):
                return self._fallback(f"HTTP {r.status_code}")

            data = r.json()
            models = data.get("models") if isinstance(data, dict) else None
            if not isinstance(models, list):
                return self._fallback("no models array")

            return [_descriptor_from_remote(m) for m in models]
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            return self._fallback(str(e) or type(e).__name__)

    def build_payload(self, req: ImageGenRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "prompt": req.prompt,
            "image_size": req.image_size or DEFAULT_IMAGE_SIZE,
            "num_images": req.num_images or DEFAULT_NUM_IMAGES,
            "sync_mode": True,
        }
        if req.negative_prompt:
            payload["negative_prompt"] = req.negative_prompt
        if req.seed is not None:
            payload["seed"] = req.seed
        return payload

    def generate(self, req: ImageGenRequest) -> ImageGenResult:
        url = f"{self.settings.endpoint('fal_run').rstrip('/')}/{req.model}"
        logger.info("generate model=%s size=%s", req.model, req.image_size or DEFAULT_IMAGE_SIZE)

        try:
            r = requests.post(
                url,
                headers=self._headers(req.api_key),
                json=self.build_payload(req),
                timeout=self.settings.timeout,
            )
            if not is_success_status(r.status_code):
                return ImageGenResult(error=_error_detail(r))

            data = r.json()
            if not isinstance(data, dict):
                return ImageGenResult(error="No images in response")

            seed = data.get("seed")
            if isinstance(data.get("images"), list):
                return ImageGenResult(images=[_to_image(i) for i in data["images"]], seed=seed)
            # Some models return a single "image" object instead.
            if data.get("image"):
                return ImageGenResult(images=[_to_image(data["image"])], seed=seed)

            return ImageGenResult(error="No images in response")
        except (requests.RequestException, ValueError, AttributeError) as e:
            logger.warning("generation failed: %s", e)
            return ImageGenResult(error=str(e) or "Unknown error")


def fetch_models(api_key: Optional[str] = None, settings: Optional[Settings] = None) -> List[ModelDescriptor]:
    return ImageGenClient(settings).list_models(api_key)


def generate_image(req: ImageGenRequest, settings: Optional[Settings] = None) -> ImageGenResult:
    return ImageGenClient(settings).generate(req)
