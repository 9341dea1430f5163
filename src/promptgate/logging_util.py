"""Logging helpers for the gateway and orchestrator.

- ``get_logger`` attaches one stream handler per named logger, unless the host
  application already configured it.
- ``log_step`` marks each orchestrator stage so a failure can be located from
  the log alone.
- ``key_fingerprint`` is the only form in which a credential may reach a log.
"""
from __future__ import annotations

import hashlib
import logging
import os

_DEFAULT_LEVEL = os.environ.get("PROMPTGATE_LOG_LEVEL", "INFO").upper()
_FORMAT = "[%(levelname)s] %(name)s:%(lineno)d - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_DEFAULT_LEVEL)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger


def log_step(logger: logging.Logger, step: str, msg: str) -> None:
    logger.info("[STEP %s] %s", step, msg)


def key_fingerprint(key: str) -> str:
    """``len=<n> sha8=<hex>``; enough to tell two keys apart, useless to replay."""
    sha8 = hashlib.sha256(key.encode("utf-8")).hexdigest()[:8]
    return f"len={len(key)} sha8={sha8}"
