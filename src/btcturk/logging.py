"""Structured logging for the BtcTurk client, with secret masking.

Every record, structlog or stdlib (httpx logs through stdlib), passes
through ``mask_secrets`` before rendering, so API secrets and request
signatures never reach a log sink.
"""

import logging
import os
from collections.abc import MutableMapping
from typing import Any

import structlog

# Event keys whose values must never reach a log sink.
SECRET_KEYS = frozenset({"api_secret", "signature", "x-signature", "secret"})
MASK = "***"

# Chatty HTTP libraries: full request lines at INFO, connection churn at DEBUG.
_HTTP_LOGGERS = ("httpx", "httpcore")


def mask_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Replace secret-bearing values, including inside header dicts."""
    for key, value in list(event_dict.items()):
        if key.lower() in SECRET_KEYS:
            event_dict[key] = MASK
        elif isinstance(value, dict):
            event_dict[key] = {
                k: (MASK if str(k).lower() in SECRET_KEYS else v) for k, v in value.items()
            }
    return event_dict


def setup_logging(
    log_level: str = "INFO",
    log_format: str | None = None,
    http_log_level: str = "WARNING",
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Root level name (``DEBUG``, ``INFO``, ...).
        log_format: ``json`` or ``console``. Defaults to the LOG_FORMAT
            environment variable, then ``console``.
        http_log_level: Level for the httpx/httpcore loggers.
    """
    log_format = (log_format or os.environ.get("LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        mask_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *shared_processors],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    http_level = getattr(logging, http_log_level.upper(), logging.WARNING)
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)
