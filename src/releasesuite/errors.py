"""Error taxonomy & redaction for release ingestion.

Failures surface in three places: parsing (no date token, bad JSON), the
release store, and configuration. ``classify_error`` folds an exception into
an :class:`ErrorInfo` the CLI can print, and ``redact`` masks credentials
that may leak into messages from store or API clients.

Public API:
- classify_error(exc) -> ErrorInfo
- redact(text) -> str
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from .config import ConfigError
from .parser import ParseError
from .store import StoreError

_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"sk-[A-Za-z0-9_-]{16,}"),  # OpenAI / OpenRouter style API keys
    re.compile(r"eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]*"),  # JWTs (service keys)
    re.compile(r"(?i)bearer\s+[A-Za-z0-9._~+/-]{16,}=*"),
]

_REDACTION_PLACEHOLDER = "<redacted>"


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    transient: bool = False
    details: dict[str, Any] | None = None


def redact(text: str) -> str:
    """Replace credential-looking substrings with a placeholder."""
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        redacted = pat.sub(_REDACTION_PLACEHOLDER, redacted)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Best-effort classification of an exception.

    - ParseError -> 'parse.date'
    - JSONDecodeError -> 'parse.json'
    - StoreError / OSError -> 'store' (OSError transient)
    - ConfigError -> 'config'
    - Fallback -> 'generic'
    """
    msg = redact(str(exc) if exc else "")
    name = exc.__class__.__name__
    if isinstance(exc, ParseError):
        return ErrorInfo("parse.date", msg, name)
    if isinstance(exc, json.JSONDecodeError):
        return ErrorInfo("parse.json", msg, name, details={"line": exc.lineno, "column": exc.colno})
    if isinstance(exc, StoreError):
        return ErrorInfo("store", msg, name)
    if isinstance(exc, ConfigError):
        return ErrorInfo("config", msg, name)
    if isinstance(exc, OSError):
        return ErrorInfo("store", msg, name, transient=True)
    return ErrorInfo("generic", msg, name)


__all__ = ["ErrorInfo", "classify_error", "redact"]
