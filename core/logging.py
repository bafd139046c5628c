# PATH: core/logging.py
"""
Structured logging for the DeepBook query client.

All contextual fields are passed only via extra={"context": {...}}.
Logs go to stderr; stdout is reserved for query results.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, Union

# Context keys shown first on the console, in this order
CONSOLE_KEYS = ("pool", "manager_key", "coin", "latency_ms")
CONSOLE_MAX_KEYS = 3

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter, one object per line.

    Decimal context values (prices, balances) are rendered as strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable single line: time | level | logger | message | context."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        base = f"{timestamp} | {record.levelname:<8} | {record.name} | {record.getMessage()}"

        context = getattr(record, "context", None)
        if context:
            keys = [k for k in CONSOLE_KEYS if k in context]
            keys += [k for k in context if k not in keys]
            shown = keys[:CONSOLE_MAX_KEYS]
            base += " | " + ", ".join(f"{k}={context[k]}" for k in shown)
            if len(keys) > CONSOLE_MAX_KEYS:
                base += f", ... (+{len(keys) - CONSOLE_MAX_KEYS} more)"

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level, as int or name ("DEBUG", "WARNING", ...)
        log_file: Optional file path; always written as JSON
        json_format: JSON (True) or console (False) format on stderr
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        StructuredFormatter() if json_format else ConsoleFormatter()
    )
    handlers = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # Request lines from the HTTP client only at DEBUG
    noisy_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
