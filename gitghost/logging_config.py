"""
Logging Configuration — Console logging for the CLI.

- Human-readable output by default
- JSON lines for scripting (LOG_FORMAT=json)
- Configurable log levels

## Environment Variables

- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
- LOG_FORMAT: json, text (default: text)

The CLI prints its own progress and summaries, so the default level keeps
engine chatter quiet. Set LOG_LEVEL=DEBUG to see every git invocation.

## Usage

    from gitghost.logging_config import setup_logging

    setup_logging()  # Call once at startup

    log = repo_logger(logging.getLogger(__name__), "project")
    log.error("Failed to create commit", extra={"commit": commit_hash})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Tuple

EXTRA_FIELDS = ("repo", "commit")

DEFAULT_LEVEL = "WARNING"
SHORT_HASH = 12


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter.

    Output format:
    {"ts": "...", "level": "...", "logger": "...", "message": "...", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


class HumanFormatter(logging.Formatter):
    """
    Human-readable log formatter.

    Output format:
    12:34:56 INFO    [engine         ] project@0123456789ab: Message
    """

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.now().strftime("%H:%M:%S")

        level = record.levelname
        if sys.stderr.isatty():
            color = self.COLORS.get(level, "")
            level = f"{color}{level:7}{self.RESET}"
        else:
            level = f"{level:7}"

        module = record.name.split(".")[-1][:15]

        return f"{time_str} {level} [{module:15}] {_context(record)}{record.getMessage()}"


def _context(record: logging.LogRecord) -> str:
    """Render repo and short commit as a "repo@hash: " prefix."""
    repo = getattr(record, "repo", None)
    commit = getattr(record, "commit", None)
    if commit:
        commit = commit[:SHORT_HASH]
    if repo and commit:
        return f"{repo}@{commit}: "
    if repo or commit:
        return f"{repo or commit}: "
    return ""


class RepoLoggerAdapter(logging.LoggerAdapter):
    """
    Attach the source repo name to every record.

    Per-call `extra` (e.g. the commit hash) is merged on top rather than
    replaced.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def repo_logger(logger: logging.Logger, repo: str) -> RepoLoggerAdapter:
    """Wrap logger so records carry the repo name."""
    return RepoLoggerAdapter(logger, {"repo": repo})


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
               Defaults to LOG_LEVEL env var or DEFAULT_LEVEL.
        format_type: Output format (json, text).
                     Defaults to LOG_FORMAT env var or text.
    """
    log_level = (level or os.environ.get("LOG_LEVEL", DEFAULT_LEVEL)).upper()
    log_format = (format_type or os.environ.get("LOG_FORMAT", "text")).lower()

    numeric_level = getattr(logging, log_level, logging.WARNING)

    formatter: logging.Formatter
    if log_format == "json":
        formatter = JSONFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(numeric_level)
    root.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={log_level}, format={log_format}"
    )
