# models/result.py

"""
Represents a student's raw score on a specific assessment.

Each `Result` links one student to one assessment. The academic records store keeps at most
one `Result` per (assessment_id, student_id) pair and overwrites it on re-entry.

Notes:
- Validation of `score` is enforced via the setter and `validate_score_input()`.
- The upper bound (`score <= total_marks`) depends on the linked assessment and is checked
  by the caller, see `Result.validate_against_total_marks()`.
"""

from __future__ import annotations

import math
from typing import Any


class Result:

    def __init__(
        self,
        assessment_id: str,
        student_id: str,
        score: float,
        remarks: str | None = None,
    ):
        self._assessment_id = assessment_id
        self._student_id = student_id
        # score is validated by its setter
        self.score = score
        self._remarks = remarks

    # === properties ===

    @property
    def key(self) -> tuple[str, str]:
        return (self._assessment_id, self._student_id)

    @property
    def assessment_id(self) -> str:
        return self._assessment_id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def score(self) -> float:
        return self._score

    @score.setter
    def score(self, score: Any) -> None:
        self._score = Result.validate_score_input(score)

    @property
    def remarks(self) -> str | None:
        return self._remarks

    @remarks.setter
    def remarks(self, remarks: str | None) -> None:
        self._remarks = remarks

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "assessmentId": self._assessment_id,
            "studentId": self._student_id,
            "score": self._score,
            "remarks": self._remarks,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Result:
        return cls(
            assessment_id=data["assessmentId"],
            student_id=data["studentId"],
            score=data["score"],
            remarks=data.get("remarks"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Result({self._assessment_id}, {self._student_id}, {self._score})"

    def __str__(self) -> str:
        return f"RESULT: assessment id: {self._assessment_id}, student id: {self._student_id}, score: {self._score}"

    # === data validators ===

    @staticmethod
    def validate_score_input(score: Any) -> float:
        """
        Validates and normalizes input for a `Result` score.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is non-negative.

        Args:
            score (Any): The input value to validate.

        Returns:
            The normalized score (float).

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or less than zero.
        """
        if isinstance(score, bool):
            raise TypeError("Invalid input. Score must be a number.")

        try:
            score = float(score)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Score must be a number.") from None

        if not math.isfinite(score):
            raise ValueError("Invalid input. Score must be a finite number.")

        if score < 0:
            raise ValueError("Invalid input. Score cannot be less than zero.")

        return score

    def validate_against_total_marks(self, total_marks: float) -> None:
        """
        Raises:
            ValueError: If the score exceeds the linked assessment's total marks.
        """
        if self._score > total_marks:
            raise ValueError(
                f"Invalid input. Score {self._score:g} exceeds total marks {total_marks:g}."
            )
