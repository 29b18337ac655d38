# tests/test_assessment.py

import datetime

import pytest

from models.assessment import Assessment, AssessmentType


def test_assessment_to_dict(sample_assessment):
    data = sample_assessment.to_dict()

    assert data["id"] == "a001"
    assert data["title"] == "Midterm Test"
    assert data["totalMarks"] == 50.0
    assert data["weight"] == 30.0
    assert data["type"] == "TEST"
    assert data["classId"] == "JSS1A"
    assert data["date"] == "2025-10-14"


def test_assessment_from_dict():
    assessment = Assessment.from_dict(
        {
            "id": "a002",
            "title": "End of Term Exam",
            "totalMarks": 100,
            "weight": 60,
            "type": "exam",
            "classId": "JSS1A",
            "subjectId": "MATH",
            "termId": "T1",
            "date": "2025-12-05T09:00:00Z",
        }
    )

    assert assessment.total_marks == 100.0
    assert assessment.weight == 60.0
    assert assessment.type is AssessmentType.EXAM
    assert assessment.date == datetime.date(2025, 12, 5)
    assert assessment.in_scope("JSS1A", "MATH", "T1")
    assert not assessment.in_scope("JSS1A", "MATH", "T2")


def test_assessment_from_dict_defaults():
    assessment = Assessment.from_dict(
        {"id": "a003", "title": "Homework 1", "totalMarks": 10, "weight": 5}
    )

    assert assessment.type is AssessmentType.TEST
    assert assessment.date is None
    assert assessment.class_id is None


def test_assessment_header_label(sample_assessment):
    assert sample_assessment.header_label == "Midterm Test (30%)"

    sample_assessment.weight = 12.5
    assert sample_assessment.header_label == "Midterm Test (12.5%)"


def test_assessment_header_label_keeps_full_weight(sample_assessment):
    sample_assessment.weight = 33.3333333
    assert sample_assessment.header_label == "Midterm Test (33.3333333%)"

    assert Assessment.format_weight(100) == "100"


def test_assessment_to_str(sample_assessment):
    assert sample_assessment.__str__() == "ASSESSMENT: title: Midterm Test, type: TEST, id: a001"


@pytest.mark.parametrize("total_marks", [0, -10, float("inf"), float("nan")])
def test_assessment_invalid_total_marks(total_marks):
    with pytest.raises(ValueError):
        Assessment("a1", "Quiz", total_marks, 10)


@pytest.mark.parametrize("weight", [-1, 100.5, float("inf")])
def test_assessment_invalid_weight(weight):
    with pytest.raises(ValueError):
        Assessment("a1", "Quiz", 10, weight)


@pytest.mark.parametrize("value", ["ten", None, True])
def test_assessment_non_numeric_total_marks(value):
    with pytest.raises(TypeError):
        Assessment.validate_total_marks_input(value)


def test_assessment_weight_bounds_are_inclusive():
    assert Assessment.validate_weight_input("0") == 0.0
    assert Assessment.validate_weight_input(100) == 100.0


def test_assessment_invalid_type():
    with pytest.raises(ValueError, match="must be one of"):
        Assessment("a1", "Quiz", 10, 10, type="essay")
