"""
Logging setup for gh-repo-audit.

Everything the package logs goes through the ``repo_audit`` logger, which
writes to stderr so that report output on stdout stays clean. Records may
carry the audited repository as ``extra={"owner": ..., "repo": ...}``;
both formatters render it.

SECURITY: Handlers redact GitHub tokens, private key blocks, JWTs and
``secret=``-style pairs before anything is written, since API error
bodies and credential failures can echo them back.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any

from repo_audit.utils.sanitizer import redact_secrets

PACKAGE_LOGGER = "repo_audit"

# Record attributes rendered as repository context
CONTEXT_FIELDS: tuple[str, ...] = ("owner", "repo", "check")

_PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_COLOR_FORMAT = (
    "\033[90m%(asctime)s\033[0m "
    "[\033[1m%(levelname)s\033[0m] "
    "\033[36m%(name)s\033[0m: %(message)s"
)
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SecretFilter(logging.Filter):
    """Redact credentials from a record's message and string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = redact_secrets(str(record.msg))

        if isinstance(record.args, dict):
            record.args = {k: self._redact(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._redact(arg) for arg in record.args)

        return True

    @staticmethod
    def _redact(value: Any) -> Any:
        return redact_secrets(value) if isinstance(value, str) else value


class SanitizingFormatter(logging.Formatter):
    """
    Single-line text formatter.

    Appends ``owner=... repo=...`` when the record carries repository
    context, drops control characters, and escapes newlines so a crafted
    repository name or API message cannot forge extra log lines.
    """

    CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        context = record_context(record)
        if context:
            message += " " + " ".join(f"{k}={v}" for k, v in context.items())

        message = self.CONTROL_CHARS.sub("", message)
        return message.replace("\n", "\\n").replace("\r", "\\r")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for CI log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Repository context attached to a record through ``extra``."""
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    no_color: bool = False,
) -> logging.Logger:
    """
    Configure the ``repo_audit`` logger.

    Calling it again replaces the previous handler, so the CLI can run it
    once per invocation.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Emit JSON lines instead of text
        no_color: Disable ANSI colors in text output

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(SecretFilter())
    handler.setFormatter(_build_formatter(json_output, no_color))
    logger.addHandler(handler)

    # Keep records out of the root logger and any handlers it may have
    logger.propagate = False

    # PyGithub logs every request at DEBUG; only surface it when asked to
    logging.getLogger("github").setLevel(
        logging.DEBUG if logger.level <= logging.DEBUG else logging.WARNING
    )

    return logger


def _build_formatter(json_output: bool, no_color: bool) -> logging.Formatter:
    if json_output:
        return JsonFormatter()
    return SanitizingFormatter(
        _PLAIN_FORMAT if no_color else _COLOR_FORMAT,
        datefmt=_DATE_FORMAT,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger within the ``repo_audit`` namespace.

    Args:
        name: Logger name, prefixed with ``repo_audit.`` unless it already is
    """
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
