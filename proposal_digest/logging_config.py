"""
Structured JSON logging configuration for production observability.

Every log line is a single JSON object; adapter and analysis failures carry
`source` and `upstream_status` extras so they can be filtered per backend.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TextIO


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.

    Formats log records as JSON with ISO 8601 timestamps and upstream context.

    Example:
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(JSONFormatter())
        >>> logger = logging.getLogger(__name__)
        >>> logger.addHandler(handler)
        >>> logger.info("Analysis started", extra={"source": "analysis"})
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Python logging.LogRecord

        Returns:
            JSON string with structured log data
        """
        log_entry = {
            "timestamp": datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add source if present (discourse, snapshot, analysis)
        if hasattr(record, "source"):
            log_entry["source"] = record.source

        # Add upstream_status if present (degraded or failed upstream calls)
        if hasattr(record, "upstream_status"):
            log_entry["upstream_status"] = record.upstream_status

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(level: str = "INFO", stream: TextIO | None = None):
    """
    Configure structured JSON logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream (stdout by default; the CLI uses stderr so
            its JSON output stays clean)

    Example:
        >>> setup_logging(level="INFO")
        >>> logging.info("Application started")
    """
    formatter = JSONFormatter()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Set levels for noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

    logging.info("Structured JSON logging configured", extra={"log_level": level})
