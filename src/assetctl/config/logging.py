"""structlog configuration for assetctl.

All library and assetctl records go through one stderr handler whose
formatter is a structlog ProcessorFormatter: a console renderer by
default, JSON lines with ``--log-json``.

Levels for the ``assetctl`` logger:

- default: WARNING (per-file failures, plugin hook failures)
- ``watch``: INFO (change events, server address)
- ``-v``: DEBUG
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "assetctl"

# Third-party loggers pinned regardless of -v.
_THIRD_PARTY_LEVELS: dict[str, int] = {
    "watchdog": logging.WARNING,
    "PIL": logging.WARNING,
    "fontTools": logging.WARNING,
    "tornado.general": logging.WARNING,
}

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib and structlog records to stderr through one formatter.

    Args:
        verbose: DEBUG for assetctl and request logs; otherwise WARNING.
        log_json: JSON lines instead of the console renderer.
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
            foreign_pre_chain=_SHARED_PROCESSORS,
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

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("tornado.access").setLevel(logging.INFO if verbose else logging.WARNING)
    for name, level in _THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def raise_verbosity(level: int = logging.INFO) -> None:
    """Lower the assetctl threshold to *level* unless it is already lower."""
    app_logger = logging.getLogger(APP_LOGGER)
    if app_logger.level > level:
        app_logger.setLevel(level)
