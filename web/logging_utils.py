"""Logging utilities for the Larkosis Pharma web app.

Provides structured JSONL logging for site events (inquiries, CSV exports).
Contact details are redacted before they reach the log file.
"""

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

__all__ = ["log_interaction", "redact_text", "LOG_DIR", "LOG_FILE"]

LOG_DIR = Path(__file__).parent / "logs"
LOG_DIR.mkdir(exist_ok=True)
LOG_FILE = LOG_DIR / f"site_events_{datetime.now().strftime('%Y%m%d')}.jsonl"

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# International, bracketed and dashed formats with at least 8 digits overall
_PHONE_PATTERN = re.compile(
    r"(?<![0-9])"
    r"(?:\+?[0-9]{1,3}[-.\s]?)?"
    r"(?:\(?\d{1,4}\)?[-.\s]?)?"
    r"\d{3,4}[-.\s]?\d{4}"
    r"(?![0-9])"
)


def redact_text(text: str) -> str:
    """Replace email addresses and phone numbers with placeholders."""
    if not text:
        return text
    text = _EMAIL_PATTERN.sub("[REDACTED_EMAIL]", text)
    return _PHONE_PATTERN.sub("[REDACTED_PHONE]", text)


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return {k: _redact_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact_value(v) for v in value]
    return value


def log_interaction(event_type: str, data: Dict[str, Any]) -> None:
    """Log a site event to a structured JSONL file.

    Args:
        event_type: Type of event (inquiry_submitted, inquiry_failed, csv_export, etc.)
        data: Event-specific data to log; strings are redacted at any depth
    """
    clean = _redact_value(dict(data))
    log_entry = {"timestamp": datetime.now().isoformat(), "event_type": event_type, **clean}
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
