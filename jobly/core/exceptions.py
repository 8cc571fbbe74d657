"""
Exceptions raised by the data-access layer.

Each error carries the HTTP status code a web layer should answer with,
so routes can translate them without knowing about individual operations.
"""

from typing import Optional


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(JoblyError):
    """Raised when input is empty, malformed, or collides with an existing row."""

    status_code = 400


class NotFoundError(JoblyError):
    """Raised when a lookup, update, or delete matches no row."""

    status_code = 404
