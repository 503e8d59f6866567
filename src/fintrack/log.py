"""Structured logging setup.

Events are rendered by structlog on top of the standard library logging
module, so the level is controlled through ``logging``. Nothing below
WARNING is shown unless ``configure_logging(verbose=True)`` is called.
"""

import logging
import sys

import structlog

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=False),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(verbose: bool = False) -> None:
    """Route fintrack log events to stderr at the requested level."""
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger("fintrack")
    root.setLevel(level)
    # sys.stderr may have been swapped since the last call, so rebuild the handler
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to a module name."""
    return structlog.get_logger(name)
