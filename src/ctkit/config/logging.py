"""structlog configuration for ctkit.

Service code logs through ``structlog.get_logger``; the validators use
plain ``logging.getLogger``. Both end up on one stderr handler, rendered
either for a terminal or as JSON lines (``--log-json``).
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager

import structlog

_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
)


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Safe to call repeatedly; the root handler is replaced each time.
    ``ctkit`` loggers emit DEBUG when *verbose*, WARNING otherwise.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_SHARED_PROCESSORS),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("ctkit").setLevel(logging.DEBUG if verbose else logging.WARNING)
    # Engine echo raises its own logger to INFO; the rest of SQLAlchemy stays quiet.
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def bind_log_context(**values: object) -> AbstractContextManager[None]:
    """Bind *values* (e.g. ``content_type_id``) to every log line in the block."""
    return structlog.contextvars.bound_contextvars(**values)
