"""Logging configuration using structlog for structured logging."""

import logging
import sys
from collections.abc import MutableMapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.stdlib import LoggerFactory, add_log_level, add_logger_name

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Global state for handlers
_configured = False
_handlers: list[logging.Handler] = []


def _get_level_no(level_name: str) -> int:
    """Get numeric log level from name."""
    return _LOG_LEVELS.get(level_name.upper(), logging.INFO)


def _add_formatted_extra_processor(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Add a '_formatted' field with the extra key/value pairs.

    The stickies identifier is listed first when present.
    """
    priority_fields = ["stickies_id", "status"]
    important_parts = []
    other_parts = []

    for key, value in event_dict.items():
        if key in ("logger", "level", "event", "timestamp", "exception", "_formatted"):
            continue

        if key in priority_fields:
            if value:
                important_parts.append(f"{key}={value}")
        elif value is not None and value != "":
            other_parts.append(f"{key}={value}")

    all_parts = important_parts + other_parts
    event_dict["_formatted"] = " | " + " ".join(all_parts) if all_parts else ""
    return event_dict


def _shared_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _setup_structlog() -> None:
    """Route structlog through the standard library logging machinery."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    json_console: bool = False,
) -> None:
    """Configure structlog logging.

    Console output goes to stderr, human-readable unless ``json_console`` is
    set. When ``log_file`` is given, every event at DEBUG and above is also
    written there as JSON with size-based rotation.

    Args:
        log_level: Minimum console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional JSON log file path
        json_console: Render console events as JSON lines
    """
    global _configured

    _setup_structlog()

    root_logger = logging.getLogger()
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_get_level_no(log_level))
    console_renderer: Any
    if json_console:
        console_renderer = JSONRenderer()
    else:
        console_renderer = ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                console_renderer,
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )
    root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(exist_ok=True, parents=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _add_formatted_extra_processor,
                    JSONRenderer(),
                ],
                foreign_pre_chain=_shared_processors(),
            )
        )
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

    _configured = True

    logger = get_logger("stickies_sync.utils.logging")
    logger.debug(
        "logging_configured",
        console_level=log_level,
        log_file=str(log_file) if log_file else None,
        json_console=json_console,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to ``name`` (typically ``__name__``).

    Logging is auto-configured with defaults on first use.
    """
    if not _configured:
        configure_logging()

    return structlog.get_logger(name)
