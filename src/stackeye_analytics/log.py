"""structlog configuration

The analytics modules emit debug events (dropped edges, revisited probes,
computed summaries), each tagged with a ``component`` key naming the module
that logged it. Callers opt in by configuring logging once at startup.
"""

from __future__ import annotations

import logging

import structlog

from stackeye_analytics.config import LoggingConfig


def _renderer(config: LoggingConfig) -> structlog.typing.Processor:
    if config.format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging(verbose: bool = False, config: LoggingConfig | None = None) -> None:
    """Configure structlog

    Args:
        verbose: Force debug level with human-readable console output
        config: Level and output format; read from STACKEYE_LOG_LEVEL and
            STACKEYE_LOG_FORMAT when omitted
    """
    if config is None:
        config = LoggingConfig.from_env()
    if verbose:
        config = LoggingConfig(level=logging.DEBUG, format="console")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(config),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(config.level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
