"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import logging

import structlog


def setup_logging(level: str = "INFO") -> None:
    """Route structlog through stdlib logging as JSON lines at ``level``.

    Safe to call more than once; later calls only move the threshold.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.EventRenamer("message"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=numeric_level, format="%(message)s")
    logging.getLogger("orderapi").setLevel(numeric_level)


logger = structlog.get_logger("orderapi")
