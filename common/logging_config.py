"""
Logging configuration for the treasury tracker.

CLI runs get a human-readable format on stderr; set ``json_format=True``
(or ``LOG_FORMAT=json``) for one JSON object per line.

Usage:
    from common.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)

    logger.warning("No price for mint", extra={'mint': mint})
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# LogRecord attributes that are not user-supplied extras
_RESERVED = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'taskName', 'message',
}


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RESERVED}


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(timespec='milliseconds'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for key, value in _extras(record).items():
            if key not in log_obj:
                log_obj[key] = value

        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for CLI output.

    Output format:
    2026-01-15 10:30:00 WARNING [engine.valuation_engine] No price for mint (mint=USDC)
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        level = record.levelname.ljust(5)

        extras = [f"{k}={v}" for k, v in _extras(record).items()]
        extra_str = f" ({', '.join(extras)})" if extras else ""

        output = f"{timestamp} {level} [{record.name}] {record.getMessage()}{extra_str}"
        if record.exc_info:
            output += f"\n{self.formatException(record.exc_info)}"
        return output


def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    logger_name: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level name. Defaults to LOG_LEVEL env var or INFO.
        json_format: Use JSON output. Defaults to LOG_FORMAT=json.
        logger_name: Specific logger to configure. If None, configures root logger.
    """
    if json_format is None:
        json_format = os.getenv('LOG_FORMAT', '').lower() == 'json'

    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO')
    resolved = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(logger_name)
    logger.setLevel(resolved)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(JsonFormatter() if json_format else HumanFormatter())
    logger.addHandler(handler)

    if logger_name:
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
