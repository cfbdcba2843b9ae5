"""Logging for the catalog package.

Console output for people, JSONL files for machines. Catalog events
(``catalog_loaded``, ``csv_export``) carry their payload as structured
fields so they can be grepped or loaded into pandas later, the same way the
site's inquiry events are written by ``web/logging_utils.py``.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

__all__ = [
    "setup_logging",
    "get_logger",
    "log_catalog_event",
    "JSONLFileHandler",
    "ColoredConsoleHandler",
    "LOG_DIR",
]

LOG_DIR = Path(__file__).parent.parent / "logs"

ROOT_LOGGER = "catalog"


class JSONLFileHandler(logging.Handler):
    """Append one JSON object per record to ``<prefix>_YYYYMMDD.jsonl``."""

    def __init__(self, log_dir: Path, prefix: str = ROOT_LOGGER):
        super().__init__()
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.prefix = prefix

    @property
    def current_file(self) -> Path:
        return self.log_dir / f"{self.prefix}_{datetime.now():%Y%m%d}.jsonl"

    def to_entry(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event_type": getattr(record, "event_type", "log"),
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "event_data", None) or {})
        if record.exc_info:
            entry["exception"] = logging.Formatter().formatException(record.exc_info)
        return entry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.to_entry(record), ensure_ascii=False, default=str)
            with open(self.current_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


class ColoredConsoleHandler(logging.StreamHandler):
    """Stream handler that colours the level name when writing to a TTY."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self.COLORS.get(record.levelname)
        if color and getattr(self.stream, "isatty", lambda: False)():
            text = text.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return text


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """Configure the ``catalog`` logger tree.

    Args:
        level: Level for the console (name or number); files always get DEBUG
        log_to_file: Write JSONL files under ``log_dir``
        log_to_console: Write human-readable lines to stdout
        log_dir: Directory for JSONL files (default: project ``logs/``)

    Returns:
        The ``catalog`` logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if log_to_file else level)

    if log_to_console:
        console = ColoredConsoleHandler(sys.stdout)
        console.setLevel(level)
        console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%H:%M:%S"))
        logger.addHandler(console)

    if log_to_file:
        logger.addHandler(JSONLFileHandler(log_dir or LOG_DIR))

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger for a catalog module: ``get_logger("store")`` -> ``catalog.store``."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_catalog_event(
    event_type: str,
    data: Dict[str, Any],
    level: int = logging.INFO,
    logger_name: str = ROOT_LOGGER,
) -> None:
    """Log a structured catalog event.

    ``data["message"]``, when present, becomes the log line; every other key
    is written as a field of the JSONL entry.
    """
    payload = dict(data)
    message = payload.pop("message", event_type)
    get_logger(logger_name).log(
        level,
        message,
        extra={"event_type": event_type, "event_data": payload},
    )
