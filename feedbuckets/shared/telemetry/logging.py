"""Logging configuration for FeedBuckets application"""
import logging
import sys

from feedbuckets.shared.context import get_correlation_id


class CorrelationIdFilter(logging.Filter):
    """Attach the current request's correlation ID to every log record"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def setup_logging(debug: bool = False):
    """Configure application-wide logging"""
    log_level = logging.DEBUG if debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger for module"""
    return logging.getLogger(name)
