"""Structured logging via structlog.

Call ``configure_logging()`` once at process start (the API server and the
import CLI do this), then use ``get_logger(__name__)`` anywhere:

    >>> logger = get_logger(__name__)
    >>> logger.info("code_created", swift_code="BANKUSNYXXX")
"""

from __future__ import annotations
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import Processor

from swift_registry.config import LogConfig, get_log_config

_configured = False


def configure_logging(
    config: Optional[LogConfig] = None,
    stream: Optional[TextIO] = None,
    force: bool = False,
) -> None:
    global _configured
    if _configured and not force:
        return
    cfg = config or get_log_config()
    level = getattr(logging, cfg.level, logging.INFO)

    logging.basicConfig(format="%(message)s", stream=stream or sys.stdout, level=level, force=True)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if cfg.json:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)
