"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from .config import GeneratorSettings


def setup_logging(
    settings: GeneratorSettings | None = None,
    *,
    json: bool | None = None,
    level: str | None = None,
) -> None:
    """Configure structlog for command-line use.

    The library never calls this itself; applications embedding the
    generator keep their own logging configuration.  ``python -m
    zkemail_inputs`` calls it once, before verification starts.

    Rendering and level come from ``GeneratorSettings`` (``ZKEMAIL_LOG_JSON``,
    ``ZKEMAIL_LOG_LEVEL``) unless overridden by the keyword arguments.  Every
    record, including stdlib records from dkimpy, goes through one handler on
    the root logger writing to stderr, so stdout stays free for the rendered
    ``Prover.toml``.  Events carry lengths, offsets and capacities only, never
    message bytes or key material.

    Parameters
    ----------
    settings:
        Source of ``log_json`` / ``log_level`` defaults (``ZKEMAIL_*`` env vars).
    json:
        Overrides ``settings.log_json``: JSON lines when *True*, a
        human-friendly console renderer when *False*.
    level:
        Overrides ``settings.log_level`` (e.g. ``"DEBUG"``, ``"info"``).
    """
    settings = settings or GeneratorSettings()
    use_json = settings.log_json if json is None else json
    level_name = (level or settings.log_level).upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
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
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # stdout may carry the generated Prover.toml
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level_name)
