"""JSON line logging for console and an optional rotating file."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


LOGGER_NAME = "deepl_sheets"

# Attributes every LogRecord carries; anything else came in through ``extra``.
RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in RESERVED_ATTRS and value is not None:
                payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True, default=_json_default)


class MergeExtraAdapter(logging.LoggerAdapter):
    """Adds the invocation context to every record without dropping call-site extras."""

    def process(self, msg, kwargs):
        merged = dict(self.extra)
        merged.update(kwargs.get("extra") or {})
        kwargs["extra"] = merged
        return msg, kwargs


def setup_logging(log_file: Optional[str], level: str, invocation_id: str) -> logging.LoggerAdapter:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = JsonFormatter()
    handlers = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    return MergeExtraAdapter(logger, {"invocationId": invocation_id})


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
