from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

_REDACTED = "***"
_SECRET_KEYS = {"password", "token", "authorization", "access_token"}


def get_logger(name: str, level: str | int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def redact(context: dict[str, Any]) -> dict[str, Any]:
    return {
        key: (_REDACTED if key.lower() in _SECRET_KEYS else value)
        for key, value in context.items()
    }


def log_event(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "outcome": outcome,
    }
    if context:
        payload["context"] = redact(context)
    logger.log(level, json.dumps(payload, default=str))
