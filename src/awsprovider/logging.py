import logging
from typing import Any, Protocol

import structlog


class AdapterLogger(Protocol):
    """
    AdapterLogger is the logging capability the provider
    needs. structlog bound loggers satisfy it.
    """

    def info(self, event: "str", **kw: "Any") -> "Any": ...

    def error(self, event: "str", **kw: "Any") -> "Any": ...


def setup_logging(level: "str") -> "None":
    """
    maps string log level to logging module levels and configures
    structlog with a simple console renderer and timestamping.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _drop_event(logger: "Any", method_name: "str", event_dict: "Any") -> "Any":
    raise structlog.DropEvent


def null_logger() -> "AdapterLogger":
    """
    returns a logger that discards every event. Used when
    the caller doesn't attach one.
    """
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=[_drop_event],
        wrapper_class=structlog.BoundLogger,
    )
