"""
Domain exceptions for the FeedBuckets application.

This module defines domain-level exceptions that represent failures the
bucketed view and mark-read operations report to their callers.
These exceptions are independent of infrastructure concerns.
"""

from typing import Any


class FeedBucketsException(Exception):
    """
    Base exception for all FeedBuckets application errors.

    All custom exceptions should inherit from this class to allow
    for consistent error handling and logging.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class UserNotFoundException(FeedBucketsException):
    """Raised when the requesting user cannot be resolved."""

    def __init__(self, user_id: str | None):
        super().__init__(
            f"User not found: {user_id}",
            "USER_NOT_FOUND",
            {"user_id": user_id},
        )
