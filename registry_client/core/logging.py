"""Structured logging for registry submissions.

Every record emitted while a submission is running carries its
``submission_id``. Bearer tokens, signatures and document bodies are masked
before a record is rendered.
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Mapping

from registry_client.core.config import LogSettings, settings

REDACTED = "[REDACTED]"

# Record attributes whose values never leave the process
REDACTED_KEYS = frozenset(
    {
        "authorization",
        "token",
        "registry_token",
        "signature",
        "body",
        "product_document",
        "cookie",
        "set-cookie",
    }
)

# Attributes every LogRecord has; anything else came in through ``extra=``
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}

_submission_id: ContextVar[str | None] = ContextVar("submission_id", default=None)


def get_submission_id() -> str | None:
    return _submission_id.get()


@contextmanager
def submission_context(submission_id: str) -> Iterator[str]:
    """Bind ``submission_id`` to every record logged inside the block."""
    token = _submission_id.set(submission_id)
    try:
        yield submission_id
    finally:
        _submission_id.reset(token)


def redact(value: Any) -> Any:
    """Mask sensitive keys in mappings, recursing into nested containers."""
    if isinstance(value, Mapping):
        return {
            key: REDACTED if str(key).lower() in REDACTED_KEYS else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields of a record, already redacted."""
    return redact(
        {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
    )


class SubmissionContextFilter(logging.Filter):
    """Copy the active submission id onto records that lack one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "submission_id", None) is None:
            record.submission_id = get_submission_id()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({k: v for k, v in record_extras(record).items() if v is not None})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class PlainFormatter(logging.Formatter):
    """Human-readable lines with redacted extras appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = " ".join(
            f"{key}={value}" for key, value in record_extras(record).items() if value is not None
        )
        return f"{line} {extras}" if extras else line


def _open_handler(cfg: LogSettings) -> logging.Handler:
    if cfg.output.lower() != "file":
        return logging.StreamHandler(sys.stdout)

    path = Path(cfg.file_path or "logs/registry_client.log")
    path.parent.mkdir(parents=True, exist_ok=True)
    if cfg.max_bytes:
        return RotatingFileHandler(
            path, maxBytes=cfg.max_bytes, backupCount=cfg.backup_count, encoding="utf-8"
        )
    return logging.FileHandler(path, encoding="utf-8")


def configure_logging(log_settings: LogSettings | None = None) -> logging.Handler:
    """Install one redacting handler on the ``registry_client`` logger.

    Only the package logger is touched, so host applications keep their own
    root configuration. Calling it again replaces the previous handler.

    Args:
        log_settings: Overrides for the ``LOG_*`` settings.

    Returns:
        The installed handler.
    """
    cfg = log_settings or settings.log

    handler = _open_handler(cfg)
    handler.addFilter(SubmissionContextFilter())
    handler.setFormatter(PlainFormatter() if cfg.format.lower() == "plain" else JsonFormatter())

    package_logger = logging.getLogger("registry_client")
    for previous in package_logger.handlers[:]:
        package_logger.removeHandler(previous)
        previous.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, cfg.level.upper(), logging.INFO))
    package_logger.propagate = False

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return handler
