# models/assessment.py

"""
The Assessment model represents a gradable activity (quiz, test, exam, homework, project)
with a maximum score and a percentage weight toward the term total.

Assessments are scoped to a class, subject, and term. Weights across the assessments of a
single scope are expected, but not required, to sum to 100.
"""

from __future__ import annotations

import datetime
import math
from enum import Enum
from typing import Any

from core.utils import parse_iso_date


class AssessmentType(str, Enum):
    EXAM = "EXAM"
    TEST = "TEST"
    QUIZ = "QUIZ"
    HOMEWORK = "HOMEWORK"
    PROJECT = "PROJECT"


class Assessment:

    def __init__(
        self,
        id: str,
        title: str,
        total_marks: float,
        weight: float,
        type: AssessmentType | str = AssessmentType.TEST,
        class_id: str | None = None,
        subject_id: str | None = None,
        term_id: str | None = None,
        date: datetime.date | None = None,
        description: str | None = None,
    ):
        self._id = id
        self._title = title
        # total_marks, weight, and type are validated by their setters
        self.total_marks = total_marks
        self.weight = weight
        self.type = type
        self._class_id = class_id
        self._subject_id = subject_id
        self._term_id = term_id
        self._date = date
        self._description = description

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, title: str) -> None:
        self._title = title

    @property
    def total_marks(self) -> float:
        return self._total_marks

    @total_marks.setter
    def total_marks(self, total_marks: Any) -> None:
        self._total_marks = Assessment.validate_total_marks_input(total_marks)

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, weight: Any) -> None:
        self._weight = Assessment.validate_weight_input(weight)

    @property
    def type(self) -> AssessmentType:
        return self._type

    @type.setter
    def type(self, type: AssessmentType | str) -> None:
        self._type = Assessment.validate_type_input(type)

    @property
    def class_id(self) -> str | None:
        return self._class_id

    @property
    def subject_id(self) -> str | None:
        return self._subject_id

    @property
    def term_id(self) -> str | None:
        return self._term_id

    @property
    def date(self) -> datetime.date | None:
        return self._date

    @property
    def date_iso(self) -> str | None:
        return self._date.isoformat() if self._date else None

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def header_label(self) -> str:
        return f"{self._title} ({Assessment.format_weight(self._weight)}%)"

    def in_scope(self, class_id: str, subject_id: str, term_id: str) -> bool:
        return (
            self._class_id == class_id
            and self._subject_id == subject_id
            and self._term_id == term_id
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "title": self._title,
            "totalMarks": self._total_marks,
            "weight": self._weight,
            "type": self._type.value,
            "classId": self._class_id,
            "subjectId": self._subject_id,
            "termId": self._term_id,
            "date": self.date_iso,
            "description": self._description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Assessment:
        return cls(
            id=data["id"],
            title=data["title"],
            total_marks=data["totalMarks"],
            weight=data["weight"],
            type=data.get("type", AssessmentType.TEST),
            class_id=data.get("classId"),
            subject_id=data.get("subjectId"),
            term_id=data.get("termId"),
            date=parse_iso_date(data.get("date")),
            description=data.get("description"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Assessment({self._id}, {self._title}, {self._total_marks}, {self._weight}, {self._type.value})"

    def __str__(self) -> str:
        return f"ASSESSMENT: title: {self._title}, type: {self._type.value}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_total_marks_input(total_marks: Any) -> float:
        """
        Validates and normalizes input for an `Assessment` total_marks value.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is strictly greater than zero.

        Args:
            total_marks (Any): The input value to validate.

        Returns:
            The normalized total marks value (float).

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or not greater than zero.
        """
        if isinstance(total_marks, bool):
            raise TypeError("Invalid input. Total marks must be a number.")

        try:
            total_marks = float(total_marks)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Total marks must be a number.") from None

        if not math.isfinite(total_marks):
            raise ValueError("Invalid input. Total marks must be a finite number.")

        if total_marks <= 0:
            raise ValueError("Invalid input. Total marks must be greater than zero.")

        return total_marks

    @staticmethod
    def validate_weight_input(weight: Any) -> float:
        """
        Validates and normalizes input for an `Assessment` weight.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is between 0 and 100, inclusive.

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or out of bounds.
        """
        if isinstance(weight, bool):
            raise TypeError("Invalid input. Weight must be a number.")

        try:
            weight = float(weight)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Weight must be a number.") from None

        if not math.isfinite(weight):
            raise ValueError("Invalid input. Weight must be a finite number.")

        if weight < 0:
            raise ValueError("Invalid input. Weight cannot be less than zero.")

        if weight > 100:
            raise ValueError("Invalid input. Weight cannot be greater than 100.")

        return weight

    @staticmethod
    def validate_type_input(type: AssessmentType | str) -> AssessmentType:
        if isinstance(type, AssessmentType):
            return type

        try:
            return AssessmentType(str(type).strip().upper())

        except ValueError:
            options = ", ".join(t.value for t in AssessmentType)
            raise ValueError(
                f"Invalid input. Assessment type must be one of: {options}."
            ) from None

    # === helper methods ===

    @staticmethod
    def format_weight(weight: float) -> str:
        # full precision: 30.0 -> "30", 33.3333333 -> "33.3333333"
        text = repr(float(weight))
        return text[:-2] if text.endswith(".0") else text
