"""structlog configuration for dtoinit.

Library modules (the builder, the reflection accessor) log through stdlib
``logging``; the service layer logs through structlog.  Both are rendered by
one :class:`structlog.stdlib.ProcessorFormatter` on stderr, as console lines
or, with ``--log-json``, as JSON lines.

Level of the ``dtoinit`` logger:

- ``-v``: DEBUG.  Cycle truncations (INFO on ``dtoinit.domain.builder``)
  and skipped annotations (DEBUG on ``dtoinit.infrastructure.reflection``)
  become visible.
- default: WARNING.  Truncations still reach the user as
  ``ServiceResult.warnings``, printed to stderr by the CLI.
- ``-q``: ERROR, so nothing but the document and hard failures is printed.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "dtoinit"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def package_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Level for the ``dtoinit`` logger; ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    quiet: bool = False,
) -> None:
    """Route structlog and stdlib records through a single stderr handler.

    Args:
        verbose: Show DEBUG and INFO records from dtoinit.
        log_json: Use JSON renderer instead of console renderer.
        quiet: Only ERROR records from dtoinit.
    """
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

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
                renderer,
            ],
        )
    )

    # Third-party libraries stay at WARNING regardless of flags.
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level(verbose=verbose, quiet=quiet))
