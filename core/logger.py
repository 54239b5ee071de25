"""Structured JSON logging for docsrails.

All output goes to stderr so hosts can keep stdout for their own reports.
Sensitive data (comment text, source contents, full paths) is redacted.

Configuration via environment variables:
  DOCSRAILS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
  DOCSRAILS_LOG_FILE: optional path to also write logs to a file
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from pathlib import PureWindowsPath

# ── Redaction helpers ─────────────────────────────────────────────────

# Keys whose values contain user content and must be redacted.
_REDACT_CONTENT_KEYS = frozenset({
    "comment", "contents", "region", "source", "text",
})

# Keys that contain filesystem paths; only the basename is logged.
_PATH_KEYS = frozenset({
    "file", "file_path", "path", "config_path",
})


def redact_value(key: str, value: object) -> object:
    """Redact a single key-value pair for safe logging.

    - Content keys: replaced with length indicator like "<512 chars>"
    - Path keys: replaced with basename only
    - Everything else: passed through unchanged
    """
    if key in _REDACT_CONTENT_KEYS:
        if isinstance(value, (str, bytes)):
            return f"<{len(value)} chars>"
        return "<redacted>"

    if key in _PATH_KEYS and isinstance(value, str) and value:
        # PureWindowsPath splits on both separators
        name = PureWindowsPath(value).name
        return name if name else value

    return value


def redact_fields(fields: dict | None) -> dict:
    """Redact a dict of structured log fields."""
    if not fields:
        return {}
    return {key: redact_value(key, value) for key, value in fields.items()}


# ── JSON formatter ────────────────────────────────────────────────────


class _JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "guard": getattr(record, "guard", None),
            "event": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data is not None:
            entry["data"] = data
        return json.dumps(entry, default=str, ensure_ascii=False)


# ── Logger setup ──────────────────────────────────────────────────────

_CONFIGURED = False


def _configure_root() -> None:
    """Configure the docsrails root logger (idempotent)."""
    global _CONFIGURED  # noqa: PLW0603
    if _CONFIGURED:
        return
    _CONFIGURED = True

    root = logging.getLogger("docsrails")

    level_name = os.environ.get("DOCSRAILS_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root.setLevel(level)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_JSONFormatter())
    root.addHandler(stderr_handler)

    log_file = os.environ.get("DOCSRAILS_LOG_FILE")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_JSONFormatter())
        root.addHandler(file_handler)

    root.propagate = False


def get_logger(component: str) -> logging.Logger:
    """Get a named logger under the docsrails hierarchy.

    Args:
        component: Guard or subsystem name (e.g. "valid_docs").

    Returns:
        A Logger that inherits the docsrails root configuration.
    """
    _configure_root()
    return logging.getLogger(f"docsrails.{component}")


# ── Event logging ─────────────────────────────────────────────────────


def _log(
    component: str,
    level: int,
    event: str,
    data: dict | None = None,
) -> None:
    """Internal: emit a structured log entry."""
    logger = get_logger(component)
    logger.log(level, event, extra={"guard": component, "data": data})


def log_check_complete(
    guard: str,
    file: str | None,
    violations: int,
    duration_ms: float,
) -> None:
    """Log a finished guard run over one file.

    Args:
        guard: Guard identifier (e.g. "valid_docs").
        file: Checked file path, reduced to its basename.
        violations: Number of flagged declarations.
        duration_ms: Check time in milliseconds.
    """
    _log(guard, logging.INFO, "check_complete", redact_fields({
        "file": file,
        "violations": violations,
        "duration_ms": round(duration_ms, 1),
    }))


def log_config_loaded(config_path: str, enabled: bool, severity: str) -> None:
    """Log the guard settings picked up from a config file."""
    _log("config", logging.INFO, "config_loaded", redact_fields({
        "config_path": config_path,
        "enabled": enabled,
        "severity": severity,
    }))


def log_error(component: str, error: str) -> None:
    """Log an unexpected error (message only, no stack trace)."""
    _log(component, logging.ERROR, "unexpected_error", {"error": error})


# ── Timer context ─────────────────────────────────────────────────────


class check_timer:
    """Context manager that measures check time in milliseconds.

    Usage:
        with check_timer() as t:
            offsets = run_check()
        elapsed = t.ms  # elapsed milliseconds
    """

    __slots__ = ("_start", "ms")

    def __enter__(self) -> check_timer:
        self._start = time.monotonic()
        self.ms = 0.0
        return self

    def __exit__(self, *_: object) -> None:
        self.ms = (time.monotonic() - self._start) * 1000
