"""Tests for core/logger.py: structured JSON logging with redaction."""

from __future__ import annotations

import json
import logging
import time

import pytest

from core.logger import (
    check_timer,
    get_logger,
    log_check_complete,
    log_config_loaded,
    log_error,
    redact_fields,
    redact_value,
)

# ── Fixture: capture structured log output ────────────────────────────


class _CaptureHandler(logging.Handler):
    """Handler that stores formatted log strings in a list."""

    def __init__(self):
        super().__init__()
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(self.format(record))


@pytest.fixture()
def log_capture():
    """Attach a capture handler to the docsrails logger hierarchy."""
    from core.logger import _JSONFormatter

    handler = _CaptureHandler()
    handler.setFormatter(_JSONFormatter())

    root = logging.getLogger("docsrails")
    original_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    yield handler

    root.removeHandler(handler)
    root.setLevel(original_level)


# ── get_logger ────────────────────────────────────────────────────────


def test_get_logger_returns_logger():
    """get_logger returns a standard Logger."""
    logger = get_logger("valid_docs")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "docsrails.valid_docs"


# ── JSON format ───────────────────────────────────────────────────────


def test_log_output_is_valid_json(log_capture):
    """Log output can be parsed as JSON."""
    log_check_complete("valid_docs", "A.swift", 0, 1.5)
    entry = json.loads(log_capture.records[-1])
    assert "timestamp" in entry
    assert entry["level"] == "INFO"
    assert entry["event"] == "check_complete"


def test_check_complete_fields(log_capture):
    """check_complete carries guard, count and rounded duration."""
    log_check_complete("valid_docs", "/home/dev/app/Sources/A.swift", 3, 42.34)
    entry = json.loads(log_capture.records[-1])
    assert entry["guard"] == "valid_docs"
    assert entry["data"]["violations"] == 3
    assert entry["data"]["duration_ms"] == 42.3
    assert entry["data"]["file"] == "A.swift"
    assert "/home" not in log_capture.records[-1]


def test_check_complete_without_file(log_capture):
    log_check_complete("valid_docs", None, 0, 0.1)
    entry = json.loads(log_capture.records[-1])
    assert entry["data"]["file"] is None


def test_config_loaded(log_capture):
    log_config_loaded("/etc/project/.docsrails.yaml", True, "block")
    entry = json.loads(log_capture.records[-1])
    assert entry["event"] == "config_loaded"
    assert entry["data"] == {
        "config_path": ".docsrails.yaml", "enabled": True, "severity": "block",
    }


def test_log_error(log_capture):
    log_error("valid_docs", "RuntimeError while checking A.swift")
    entry = json.loads(log_capture.records[-1])
    assert entry["level"] == "ERROR"
    assert entry["data"]["error"] == "RuntimeError while checking A.swift"


# ── Redaction ─────────────────────────────────────────────────────────


def test_redact_comment_text():
    """Comment bodies are replaced with a length indicator."""
    assert redact_value("comment", "- parameter x: secret") == "<21 chars>"


def test_redact_contents_bytes():
    assert redact_value("contents", b"func a() {}") == "<11 chars>"


def test_redact_unknown_content_type():
    assert redact_value("region", 123) == "<redacted>"


def test_redact_path_to_basename():
    assert redact_fields({"file_path": "/home/user/proj/main.swift"}) == {
        "file_path": "main.swift"
    }


def test_redact_windows_path():
    assert redact_value("path", "C:\\Users\\dev\\main.swift") == "main.swift"


def test_non_sensitive_keys_unchanged():
    fields = {"violations": 2, "guard": "valid_docs"}
    assert redact_fields(fields) == fields


def test_redact_fields_handles_none():
    assert redact_fields(None) == {}


# ── Log level control ────────────────────────────────────────────────


def test_info_hidden_at_error_level(log_capture):
    """INFO messages are suppressed when level is ERROR."""
    get_logger("valid_docs")
    root = logging.getLogger("docsrails")
    root.setLevel(logging.ERROR)
    log_check_complete("valid_docs", None, 0, 0.1)
    assert not any("check_complete" in r for r in log_capture.records)


# ── Timer ─────────────────────────────────────────────────────────────


def test_check_timer_measures():
    with check_timer() as t:
        time.sleep(0.01)
    assert t.ms >= 5
