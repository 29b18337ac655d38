# models/grading_scale.py

"""
Represents a school's grading scale: a set of non-overlapping score bands, each mapped to a
letter grade and an optional remark (e.g. "A", 80-100, "Excellent").

A weighted gradebook total is looked up against the scale to produce a grade. Scores that
fall outside every band have no grade and are rendered as "N/A".
"""

from __future__ import annotations

import math
from typing import Any

NO_GRADE = "N/A"


class GradeBand:

    def __init__(
        self,
        grade: str,
        min_score: float,
        max_score: float,
        remark: str | None = None,
    ):
        if not isinstance(grade, str) or not grade.strip():
            raise ValueError("Invalid input. Grade label cannot be blank.")

        self._grade = grade.strip()
        self._min_score = GradeBand.validate_score_bound(min_score, "Minimum score")
        self._max_score = GradeBand.validate_score_bound(max_score, "Maximum score")
        self._remark = remark

        if self._min_score > self._max_score:
            raise ValueError(
                "Invalid input. Minimum score cannot be greater than maximum score."
            )

    # === properties ===

    @property
    def grade(self) -> str:
        return self._grade

    @property
    def min_score(self) -> float:
        return self._min_score

    @property
    def max_score(self) -> float:
        return self._max_score

    @property
    def remark(self) -> str | None:
        return self._remark

    def contains(self, score: float) -> bool:
        return self._min_score <= score <= self._max_score

    def overlaps(self, other: GradeBand) -> bool:
        return (
            self._min_score <= other.max_score and other.min_score <= self._max_score
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "grade": self._grade,
            "minScore": self._min_score,
            "maxScore": self._max_score,
            "remark": self._remark,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradeBand:
        return cls(
            grade=data["grade"],
            min_score=data["minScore"],
            max_score=data["maxScore"],
            remark=data.get("remark"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"GradeBand({self._grade}, {self._min_score}, {self._max_score}, {self._remark})"

    def __str__(self) -> str:
        return f"GRADE: {self._grade} ({self._min_score:g} - {self._max_score:g})"

    # === data validators ===

    @staticmethod
    def validate_score_bound(score: Any, label: str) -> float:
        """
        Validates a band boundary: a finite number between 0 and 100, inclusive.

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or out of bounds.
        """
        try:
            score = float(score)

        except (TypeError, ValueError):
            raise TypeError(f"Invalid input. {label} must be a number.") from None

        if not math.isfinite(score) or score < 0 or score > 100:
            raise ValueError(f"Invalid input. {label} must be between 0 and 100.")

        return score


class GradingScale:

    def __init__(self, bands: list[GradeBand] | None = None):
        self._bands: list[GradeBand] = []

        for band in bands or []:
            self.add_band(band)

    @property
    def bands(self) -> list[GradeBand]:
        return list(self._bands)

    @property
    def is_empty(self) -> bool:
        return not self._bands

    def add_band(self, band: GradeBand) -> None:
        """
        Adds a band, keeping the scale ordered by minimum score, highest first.

        Raises:
            ValueError: If the band's score range overlaps an existing band.
        """
        for existing in self._bands:
            if band.overlaps(existing):
                raise ValueError(
                    f"Score range {band.min_score:g}-{band.max_score:g} overlaps with existing grade '{existing.grade}'."
                )

        self._bands.append(band)
        self._bands.sort(key=lambda b: b.min_score, reverse=True)

    def remove_band(self, grade: str) -> GradeBand:
        for band in self._bands:
            if band.grade == grade:
                self._bands.remove(band)
                return band

        raise KeyError(f"No grade '{grade}' in the grading scale.")

    def band_for(self, score: float) -> GradeBand | None:
        return next((band for band in self._bands if band.contains(score)), None)

    def grade_for(self, score: float) -> str:
        band = self.band_for(score)
        return band.grade if band else NO_GRADE

    # === persistence and import ===

    def to_list(self) -> list[dict]:
        return [band.to_dict() for band in self._bands]

    @classmethod
    def from_list(cls, data: list[dict]) -> GradingScale:
        return cls([GradeBand.from_dict(d) for d in data])

    def __len__(self) -> int:
        return len(self._bands)
