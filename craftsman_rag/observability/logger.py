"""
Logging setup.

``configure_logging`` installs a single stdout handler on the root logger.
Every line carries the request correlation id, or ``-`` outside a request.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from craftsman_rag.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "astrapy", "google_genai")


class CorrelationIdFilter(logging.Filter):
    """Attach the current request correlation id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Replace root handlers with a stdout handler at ``level``."""
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
