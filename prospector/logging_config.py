"""
Prospector - Logging setup.

setup_logging() runs once when the API app is built; defaults come from
prospector.config (LOG_LEVEL, LOG_FORMAT, LOG_FILE). Modules log through
named loggers under "prospector.*" and attach batch context with extra=:

    logger.warning("Item failed", extra={"batch_id": bid, "item_index": 2})

Both formatters surface that context: JSON lines as top-level keys, text lines
as a trailing "[batch_id=... item_index=...]" tag.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

# Context a bulk run or search attaches to its records
CONTEXT_FIELDS = ("batch_id", "prospect_id", "phase", "item_index", "duration_ms")

QUIET_LOGGERS = ("asyncio", "uvicorn.access", "httpx")


def record_context(record: logging.LogRecord) -> dict:
    """The non-empty context fields carried by a record."""
    context = {}
    for key in CONTEXT_FIELDS:
        value = getattr(record, key, None)
        if value not in (None, ""):
            context[key] = value
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per line, context fields promoted to top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc)
                                 .isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_context(record))
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }
        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Readable lines for development, with the batch context appended."""

    def __init__(self):
        super().__init__(fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
                         datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


_initialized = False


def setup_logging(level: str = None, fmt: str = None, log_file: str = None):
    """Install the root handlers. Only the first call has an effect."""
    global _initialized
    if _initialized:
        return
    _initialized = True

    from prospector import config

    level = (level or config.LOG_LEVEL).upper()
    fmt = fmt or config.LOG_FORMAT
    log_file = log_file or config.LOG_FILE

    formatter = JSONFormatter() if fmt == "json" else TextFormatter()
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.set_name("prospector")
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("prospector").info(
        "Logging configured: level=%s, format=%s%s",
        level, fmt, f", file={log_file}" if log_file else "")
