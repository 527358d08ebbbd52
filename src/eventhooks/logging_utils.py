"""Logging bootstrap utilities with optional structured output."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import structlog

APP_LOGGER_PREFIX = "eventhooks"


def _best_effort_private_permissions(path: Path) -> None:
    if os.name != "posix":
        return
    try:
        path.chmod(0o600)
    except OSError:
        logging.getLogger(__name__).warning(
            "Unable to enforce 0600 permissions for %s", path
        )


def _structured_formatter() -> logging.Formatter:
    """Route stdlib and structlog records through a JSON renderer."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(
            ensure_ascii=False, separators=(",", ":")
        ),
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
    )


def configure_logging(logging_config: dict[str, Any]) -> None:
    """Configure root logging from the ``[logging]`` config section."""
    level_name = str(logging_config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    structured = bool(logging_config.get("structured", True))
    log_to_file = bool(logging_config.get("log_to_file", False))
    log_file_path = str(
        logging_config.get(
            "log_file_path", "~/.local/state/eventhooks/eventhooks.log"
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    # Only our own records reach stderr; host applications own the rest.
    def app_only_filter(record: logging.LogRecord) -> bool:
        return record.name.startswith(APP_LOGGER_PREFIX)

    formatter: logging.Formatter
    if structured:
        formatter = _structured_formatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    console_level = max(level, logging.WARNING)
    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(console_level)
    stderr_handler.setFormatter(formatter)
    stderr_handler.addFilter(app_only_filter)
    root.addHandler(stderr_handler)

    if log_to_file:
        target = Path(log_file_path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        _best_effort_private_permissions(target)
