"""structlog setup for j2c.

Every log line goes to stderr: stdout carries CSV (convert) or validator
summaries and must stay clean for piping.
"""
import logging
import sys

import structlog
from structlog.types import FilteringBoundLogger, Processor

_CALLSITE = [
    structlog.processors.CallsiteParameter.FILENAME,
    structlog.processors.CallsiteParameter.FUNC_NAME,
    structlog.processors.CallsiteParameter.LINENO,
]


def _renderer(format_type: str) -> Processor:
    if format_type == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = "WARNING", format_type: str = "human", structured: bool = False
) -> None:
    """Route structlog through stdlib logging on stderr.

    Args:
        level: DEBUG, INFO, WARNING or ERROR
        format_type: "json" for one JSON object per line, anything else for
            the console renderer
        structured: add filename, function and line number to every event
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if structured:
        processors.append(structlog.processors.CallsiteParameterAdder(parameters=_CALLSITE))
    processors.append(_renderer(format_type))

    # Loggers are created at import time, before the CLI reads settings.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "j2c") -> FilteringBoundLogger:
    """Structured logger for `name`, e.g. `get_logger("j2c.api")`."""
    return structlog.get_logger(name)
