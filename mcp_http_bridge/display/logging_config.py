"""Logging configuration setup.

stdout carries the MCP protocol, so logs go to stderr and, optionally,
to a timestamped file under ``logs/``.
"""

import copy
import logging
import logging.config
import os
import re
import sys
from datetime import datetime
from typing import Optional, Set, Tuple

from mcp_http_bridge.constants import LOG_DIR

# ── Secret redaction filter ──────────────────────────────────────────────

_REDACTED = "***REDACTED***"


class SecretRedactionFilter(logging.Filter):
    """Logging filter that replaces registered secret values with a placeholder."""

    def __init__(self) -> None:
        super().__init__()
        self._secrets: Set[str] = set()
        self._pattern: Optional[re.Pattern[str]] = None

    def register(self, value: Optional[str]) -> None:
        """Register a secret value for redaction."""
        if value and len(value) >= 4:  # skip trivially short values
            self._secrets.add(value)
            escaped = sorted((re.escape(s) for s in self._secrets), key=len, reverse=True)
            self._pattern = re.compile("|".join(escaped))

    def filter(self, record: logging.LogRecord) -> bool:
        if self._pattern is not None:
            if isinstance(record.msg, str):
                record.msg = self._pattern.sub(_REDACTED, record.msg)
            if record.args:
                if isinstance(record.args, dict):
                    record.args = {
                        k: self._pattern.sub(_REDACTED, v) if isinstance(v, str) else v
                        for k, v in record.args.items()
                    }
                elif isinstance(record.args, tuple):
                    record.args = tuple(
                        self._pattern.sub(_REDACTED, a) if isinstance(a, str) else a
                        for a in record.args
                    )
        return True


# Module-level singleton; the CLI registers the auth token at startup.
secret_redaction_filter = SecretRedactionFilter()

_APP_LOGGERS = ("mcp_http_bridge", "mcp")

BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "stderr": {
            "format": "%(levelname)s [%(name)s] %(message)s",
        },
        "simple_file": {
            "format": ("%(asctime)s - %(name)25s:%(lineno)-4d - %(levelname)-7s - %(message)s"),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "stderr_handler": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "stderr",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "httpx": {
            "handlers": ["stderr_handler"],
            "propagate": False,
            "level": "WARNING",
        },
        "httpcore": {
            "handlers": ["stderr_handler"],
            "propagate": False,
            "level": "WARNING",
        },
    },
    "root": {
        "handlers": ["stderr_handler"],
        "level": "WARNING",
    },
}


def setup_logging(log_lvl_str: str, *, log_to_file: bool = False) -> Tuple[Optional[str], str]:
    """
    Set up the logging system.

    Args:
        log_lvl_str: The desired log level string (e.g., 'debug', 'info').
        log_to_file: Also write a timestamped log file under ``logs/``.

    Returns:
        A tuple of (log_file_path or None, validated_log_level).
    """
    log_lvl_valid = log_lvl_str.upper()
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if log_lvl_valid not in valid_levels:
        print(f"Warning: invalid log level '{log_lvl_str}'. Using 'INFO'.", file=sys.stderr)
        log_lvl_valid = "INFO"

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    handler_names = ["stderr_handler"]

    log_fpath: Optional[str] = None
    if log_to_file:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        os.makedirs(LOG_DIR, exist_ok=True)
        log_fpath = os.path.join(LOG_DIR, f"bridge_{ts}_{log_lvl_valid}.log")
        log_cfg["handlers"]["file_handler"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": log_fpath,
            "encoding": "utf-8",
        }
        handler_names.append("file_handler")

    for name in _APP_LOGGERS:
        log_cfg["loggers"][name] = {
            "handlers": handler_names,
            "propagate": False,
            "level": log_lvl_valid,
        }
    for name in ("httpx", "httpcore"):
        log_cfg["loggers"][name]["handlers"] = handler_names
    log_cfg["root"]["handlers"] = handler_names
    log_cfg["root"]["level"] = log_lvl_valid if log_lvl_valid == "DEBUG" else "WARNING"

    try:
        logging.config.dictConfig(log_cfg)
    except (ValueError, TypeError, AttributeError, ImportError, OSError) as e_log_cfg:
        print(f"Error applying logging configuration: {e_log_cfg}", file=sys.stderr)
        return None, log_lvl_valid

    # dictConfig builds fresh handlers; attach the redaction filter to each.
    for logger_name in (None, *_APP_LOGGERS, "httpx", "httpcore"):
        for handler in logging.getLogger(logger_name).handlers:
            if secret_redaction_filter not in handler.filters:
                handler.addFilter(secret_redaction_filter)

    return log_fpath, log_lvl_valid
