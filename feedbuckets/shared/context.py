"""
Request context management using contextvars.

Provides async-safe storage for request-scoped data such as the
correlation ID, readable from logging without threading it through calls.

Usage:
    # In middleware:
    set_correlation_id("3f1c...")

    # Anywhere during the same request:
    get_correlation_id()  # Returns "3f1c..." or "" outside a request
"""

from contextvars import ContextVar

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current request."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str:
    """Get the correlation ID for the current request."""
    return _correlation_id.get()
