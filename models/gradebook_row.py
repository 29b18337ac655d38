# models/gradebook_row.py

"""
Derived, read-only views produced by the gradebook aggregator.

- `ScoreCell`: one student's outcome on one assessment. A missing score is kept distinct
  from a score of zero (`raw is None`).
- `GradebookRow`: one student, their cells in assessment order, and the weighted total.
- `GradebookSummary`: the ranked rows of a scope plus the sum of assessment weights.

None of these are persisted. They are recomputed from assessments and results on every read.
"""

from __future__ import annotations

import math

from models.grading_scale import NO_GRADE, GradeBand
from models.student import Student

MISSING_SCORE = "-"


class ScoreCell:

    def __init__(self, raw: float | None, weighted: float = 0.0, percentage: float = 0.0):
        self._raw = raw
        self._weighted = weighted
        self._percentage = percentage

    @classmethod
    def missing(cls) -> ScoreCell:
        return cls(raw=None)

    @property
    def raw(self) -> float | None:
        return self._raw

    @property
    def weighted(self) -> float:
        return self._weighted

    @property
    def percentage(self) -> float:
        """Score as a percentage of total marks, on a 0-100 scale."""
        return self._percentage

    @property
    def is_missing(self) -> bool:
        return self._raw is None

    def to_dict(self) -> dict:
        return {
            "raw": MISSING_SCORE if self._raw is None else self._raw,
            "weighted": self._weighted,
            "percentage": self._percentage,
        }

    def __repr__(self) -> str:
        return f"ScoreCell({self._raw}, {self._weighted}, {self._percentage})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreCell):
            return NotImplemented

        return (
            self._raw == other.raw
            and math.isclose(self._weighted, other.weighted)
            and math.isclose(self._percentage, other.percentage)
        )


class GradebookRow:

    def __init__(
        self,
        student: Student,
        scores: list[ScoreCell],
        total_weighted_score: float,
        grade_band: GradeBand | None = None,
    ):
        self._student = student
        self._scores = scores
        self._total_weighted_score = total_weighted_score
        self._grade_band = grade_band

    @property
    def student(self) -> Student:
        return self._student

    @property
    def scores(self) -> list[ScoreCell]:
        return list(self._scores)

    @property
    def total_weighted_score(self) -> float:
        return self._total_weighted_score

    @property
    def grade_band(self) -> GradeBand | None:
        return self._grade_band

    @property
    def grade(self) -> str:
        return self._grade_band.grade if self._grade_band else NO_GRADE

    @property
    def assessed_count(self) -> int:
        return sum(1 for cell in self._scores if not cell.is_missing)

    def to_dict(self, include_grade: bool = False) -> dict:
        data = {
            "student": self._student.to_dict(),
            "scores": [cell.to_dict() for cell in self._scores],
            "totalWeightedScore": self._total_weighted_score,
        }

        if include_grade:
            data["grade"] = self.grade
            data["remark"] = self._grade_band.remark if self._grade_band else None

        return data

    def __repr__(self) -> str:
        return f"GradebookRow({self._student.id}, {self._total_weighted_score})"


class GradebookSummary:

    def __init__(
        self,
        rows: list[GradebookRow],
        total_weight: float,
        graded: bool = False,
    ):
        self._rows = rows
        self._total_weight = total_weight
        self._graded = graded

    @property
    def rows(self) -> list[GradebookRow]:
        return list(self._rows)

    @property
    def total_weight(self) -> float:
        return self._total_weight

    @property
    def is_graded(self) -> bool:
        return self._graded

    def weights_complete(self, expected: float = 100.0) -> bool:
        return math.isclose(self._total_weight, expected, abs_tol=1e-9)

    def ranked(self) -> list[tuple[int, GradebookRow]]:
        return list(enumerate(self._rows, 1))

    def to_dict(self) -> dict:
        return {
            "rows": [row.to_dict(include_grade=self._graded) for row in self._rows],
            "totalWeight": self._total_weight,
        }

    def __len__(self) -> int:
        return len(self._rows)
