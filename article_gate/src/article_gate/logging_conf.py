"""
Structured logging configuration using structlog.

Gate verdicts and generation failures are logged as key-value events so
blocked articles can be traced back to their reasons. Module loggers are
lazy: they pick up whatever configuration is active on first use, so
setup_logging() may run after the modules that log have been imported.
"""

import logging
import sys

import structlog
from structlog.types import Processor

QUIET_LIBRARIES = ("httpx", "httpcore", "openai", "uvicorn.access")


def _processors(json_output: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        # Arabic reasons stay readable in the JSON lines
        return chain + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return chain + [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Emit one JSON object per line instead of console output
    """
    numeric_level = getattr(logging, level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)
    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None):
    """
    Return a lazy structlog logger, tagged with ``logger=name`` when given.

    Nothing is bound until the first log call, so loggers created at import
    time still honour a later setup_logging().
    """
    if name:
        return structlog.get_logger(logger=name)
    return structlog.get_logger()


def bind_context(**kwargs) -> None:
    """Bind request-scoped context to all subsequent log entries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
