"""Log routing for the protodocs CLI.

Library modules log through stdlib ``logging`` and never configure it.
The CLI calls :func:`configure_logging` once per invocation, which renders
those records through structlog's ProcessorFormatter on stderr:

- Human (default): colored console lines
- JSON (``--log-json``): one JSON object per line

Structured fields come from two places. ``extra={...}`` on a stdlib call
becomes top-level keys, and :func:`bind_daemon_context` tags every later
record with the daemon the command is working on.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

_PACKAGE_LOGGER = "protodocs"

# Kept at WARNING even under --verbose.
_NOISY_LOGGERS = ("networkx",)


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route ``protodocs`` records to stderr; safe to call more than once.

    Args:
        verbose: Show DEBUG and INFO from protodocs. Otherwise WARNING and up.
        log_json: Emit JSON lines instead of console lines.
    """
    structlog.contextvars.clear_contextvars()
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
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_daemon_context(name: str, descriptor_path: Path | None = None) -> None:
    """Tag subsequent log records with the daemon (and descriptor) in use."""
    context: dict[str, str] = {"daemon": name}
    if descriptor_path is not None:
        context["descriptor"] = str(descriptor_path)
    structlog.contextvars.bind_contextvars(**context)
