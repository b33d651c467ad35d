"""structlog configuration for the ``atdata`` CLI.

The codec modules log through plain :mod:`logging` at DEBUG, passing their
context (envelope marker, CBOR item type, rejected CID) as ``extra=`` fields.
This module routes those records through structlog so the fields come out as
keys, alongside whatever the service layer has bound (``op``).

Two renderers, both on stderr:
- console (default)
- JSON lines (``--log-json``), with tracebacks as structured dicts

Library callers never need this; only :mod:`atdata.cli` calls it.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

ATDATA_LOGGER = "atdata"


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _render_chain(log_json: bool) -> list[Processor]:
    if log_json:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install a single stderr handler and set the ``atdata`` log level.

    Args:
        verbose: Show DEBUG records from ``atdata.*``; otherwise WARNING and up.
        log_json: Render JSON lines instead of console text.

    Safe to call more than once; each call replaces the previous handler.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(ATDATA_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
