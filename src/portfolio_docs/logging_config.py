from __future__ import annotations

import logging

from portfolio_docs.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Send portfolio_docs logs to stderr; safe to call more than once."""
    global _handler
    package_logger = logging.getLogger("portfolio_docs")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in package_logger.handlers:
        package_logger.addHandler(_handler)
