# tests/test_grading_scale.py

import pytest

from models.grading_scale import NO_GRADE, GradeBand, GradingScale


def test_grading_scale_orders_bands(sample_grading_scale):
    assert [band.grade for band in sample_grading_scale.bands] == ["A", "B", "C", "F"]


@pytest.mark.parametrize(
    "score, grade",
    [(100, "A"), (70, "A"), (65.5, "B"), (50, "C"), (49.99, "F"), (0, "F")],
)
def test_grade_for(sample_grading_scale, score, grade):
    assert sample_grading_scale.grade_for(score) == grade


def test_grade_for_gap():
    scale = GradingScale([GradeBand("A", 70, 100), GradeBand("F", 0, 39)])

    assert scale.grade_for(55) == NO_GRADE
    assert scale.band_for(55) is None


def test_add_overlapping_band(sample_grading_scale):
    with pytest.raises(ValueError, match="overlaps"):
        sample_grading_scale.add_band(GradeBand("A+", 90, 100))


def test_remove_band(sample_grading_scale):
    removed = sample_grading_scale.remove_band("B")

    assert removed.grade == "B"
    assert len(sample_grading_scale) == 3

    with pytest.raises(KeyError):
        sample_grading_scale.remove_band("B")


def test_grading_scale_round_trip(sample_grading_scale):
    data = sample_grading_scale.to_list()

    assert data[0] == {"grade": "A", "minScore": 70.0, "maxScore": 100.0, "remark": "Excellent"}
    assert [b.grade for b in GradingScale.from_list(data).bands] == ["A", "B", "C", "F"]


@pytest.mark.parametrize(
    "grade, min_score, max_score",
    [("", 0, 10), ("A", 80, 70), ("A", -1, 10), ("A", 0, 101)],
)
def test_invalid_grade_band(grade, min_score, max_score):
    with pytest.raises(ValueError):
        GradeBand(grade, min_score, max_score)
