"""
Logging setup.

Modules log through `logging.getLogger(__name__)` with `key=value` messages.
`setup_logging` runs once from the app lifespan and picks JSON (default) or
plain text output.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone

_EXTRA_FIELDS = ("operation", "blog_id", "path")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            value = record.__dict__.get(key)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def log_format() -> str:
    return os.environ.get("LOG_FORMAT", "json").strip().lower() or "json"


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    level = (level or log_level()).upper()
    fmt = fmt or log_format()

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root = logging.getLogger()
    # Re-running (e.g. under reload) must not stack handlers.
    for existing in list(root.handlers):
        if getattr(existing, "_blogs_api", False):
            root.removeHandler(existing)
    handler._blogs_api = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))
    return handler
