# core/exceptions.py

"""
Exception types raised by the gradebook aggregator.

`ValidationError` subclasses `ValueError` so callers that already guard record
construction with `except ValueError` keep working.
"""

from __future__ import annotations


class GradebookError(Exception):
    """Base class for gradebook computation errors."""


class ValidationError(GradebookError, ValueError):
    """
    Raised when an assessment or result record is malformed.

    Attributes:
        record_type (str | None): "assessment", "student", or "result".
        record_id (str | None): Identifier of the offending record, if known.
    """

    def __init__(
        self,
        message: str,
        record_type: str | None = None,
        record_id: str | None = None,
    ):
        super().__init__(message)
        self.record_type = record_type
        self.record_id = record_id

    def __str__(self) -> str:
        message = super().__str__()

        if self.record_type is None:
            return message

        return f"{self.record_type} {self.record_id!r}: {message}"


class EmptyScopeError(GradebookError):
    """Raised when a class/subject/term scope has no assessments or no students."""
