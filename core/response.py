# core/response.py

"""
Structured results for record store, gradebook, and export operations.

Public operations never raise for expected failures. They return a `Response` whose `error` is an
`ErrorCode` and whose `status_code` mirrors the HTTP status a web front end would send.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    # === Missing Data ===
    NOT_FOUND = "NOT_FOUND"

    # the requested class/subject/term has no assessments or no students
    EMPTY_SCOPE = "EMPTY_SCOPE"

    # === Validation Failures ===
    # required argument or attribute is missing
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # file or payload structure is malformed or unsupported
    INVALID_INPUT = "INVALID_INPUT"

    # score, weight, or total marks out of bounds or not a number
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # each record is valid alone, but together they break a rule (duplicates, overlaps)
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"
    LOGIC_ERROR = "LOGIC_ERROR"


# error codes whose default status is not 400
_STATUS_BY_ERROR = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.EMPTY_SCOPE: 404,
}


class Response:
    """
    Standard Response object for record store, gradebook, and export operations.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): HTTP-style status code.
        data (dict): Optional payload, varies by operation.
        trace (str | None): Exception traceback, set only for unexpected errors.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
        trace: str | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}
        self._trace = trace

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data

    @property
    def trace(self) -> str | None:
        return self._trace

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=True,
            detail=detail,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
        trace: str | None = None,
    ) -> Response:
        """
        Builds a failed response.

        Notes:
            - If `status_code` is omitted, it is derived from `error`: 404 for `NOT_FOUND` and
              `EMPTY_SCOPE`, 400 otherwise.
        """
        if status_code is None:
            status_code = _STATUS_BY_ERROR.get(error, 400)

        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
            trace=trace,
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        """
        Serializes the response to plain JSON-compatible values.

        Payload values that define `to_dict()` (records, gradebook summaries) are serialized with it,
        as are lists of them.
        """
        return {
            "success": self.success,
            "error": self.error.value if isinstance(self.error, Enum) else self.error,
            "detail": self.detail,
            "data": {key: _serialize(value) for key, value in self.data.items()},
            "status_code": self.status_code,
            "trace": self.trace,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> Response:
        error = payload.get("error")

        if error in ErrorCode._value2member_map_:
            error = ErrorCode(error)

        return cls(
            success=payload["success"],
            error=error,
            detail=payload.get("detail"),
            data=payload.get("data", {}),
            status_code=payload.get("status_code"),
            trace=payload.get("trace"),
        )

    # === dunder methods ===

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"

        error_str = self.error.value if isinstance(self.error, Enum) else self.error or ""
        return f"Error: {error_str}"


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()

    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]

    return value
