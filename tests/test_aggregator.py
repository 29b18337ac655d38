# tests/test_aggregator.py

import logging
import math

import pytest

from core.aggregator import aggregate_gradebook, aggregate_payload, build_gradebook
from core.exceptions import EmptyScopeError, ValidationError
from core.response import ErrorCode
from models.assessment import Assessment
from models.result import Result
from models.student import Student

# === worked example ===


def test_aggregate_weighted_totals(example_assessments, example_students, example_results):
    summary = aggregate_gradebook(example_assessments, example_students, example_results)

    totals = {row.student.id: row.total_weighted_score for row in summary.rows}

    assert math.isclose(totals["s1"], 80.0)
    assert math.isclose(totals["s2"], 36.0)
    assert summary.total_weight == 100.0


def test_aggregate_sorts_by_total_descending(example_assessments, example_students, example_results):
    # s2 comes first in the input but has the lower total
    students = list(reversed(example_students))
    summary = aggregate_gradebook(example_assessments, students, example_results)

    assert [row.student.id for row in summary.rows] == ["s1", "s2"]
    assert [rank for rank, _ in summary.ranked()] == [1, 2]


def test_aggregate_score_cells(example_assessments, example_students, example_results):
    summary = aggregate_gradebook(example_assessments, example_students, example_results)
    s1, s2 = summary.rows

    assert s1.scores[0].raw == 80
    assert math.isclose(s1.scores[0].weighted, 32.0)
    assert math.isclose(s1.scores[0].percentage, 80.0)
    assert math.isclose(s1.scores[1].weighted, 48.0)

    assert s2.scores[0].raw == 90
    assert s2.scores[1].is_missing
    assert s2.scores[1].raw is None
    assert s2.scores[1].weighted == 0.0
    assert s2.scores[1].to_dict()["raw"] == "-"


def test_aggregate_cells_follow_assessment_order(example_assessments, example_students, example_results):
    summary = aggregate_gradebook(
        list(reversed(example_assessments)), example_students, example_results
    )
    s2 = next(row for row in summary.rows if row.student.id == "s2")

    assert s2.scores[0].is_missing
    assert s2.scores[1].raw == 90


def test_aggregate_does_not_mutate_inputs(example_assessments, example_students, example_results):
    students = list(example_students)
    results = list(example_results)

    aggregate_gradebook(example_assessments, students, results)

    assert [s.id for s in students] == ["s1", "s2"]
    assert results == example_results


# === edge cases ===


def test_aggregate_ties_keep_input_order(example_assessments):
    students = [
        Student("s3", "Chidi", "Eze", "ADM003"),
        Student("s1", "Ada", "Okafor", "ADM001"),
        Student("s2", "Bayo", "Adeyemi", "ADM002"),
    ]
    results = [
        Result("a1", "s3", 50),
        Result("a1", "s1", 50),
        Result("a1", "s2", 50),
    ]

    summary = aggregate_gradebook(example_assessments, students, results)

    assert [row.student.id for row in summary.rows] == ["s3", "s1", "s2"]


def test_aggregate_student_without_results(example_assessments, example_students):
    summary = aggregate_gradebook(example_assessments, example_students, [])

    assert len(summary) == 2

    for row in summary.rows:
        assert row.total_weighted_score == 0.0
        assert all(cell.is_missing for cell in row.scores)
        assert row.assessed_count == 0


def test_aggregate_zero_score_is_not_missing(example_assessments, example_students):
    summary = aggregate_gradebook(
        example_assessments, example_students, [Result("a1", "s1", 0)]
    )
    s1 = next(row for row in summary.rows if row.student.id == "s1")

    assert not s1.scores[0].is_missing
    assert s1.scores[0].raw == 0
    assert s1.scores[1].is_missing


def test_aggregate_incomplete_weights_warns(example_students, caplog):
    assessments = [Assessment("a1", "Quiz 1", 20, 30)]

    with caplog.at_level(logging.WARNING, logger="core.aggregator"):
        summary = aggregate_gradebook(assessments, example_students, [Result("a1", "s1", 10)])

    assert summary.total_weight == 30.0
    assert not summary.weights_complete()
    assert "expected 100%" in caplog.text


def test_aggregate_skips_results_outside_scope(example_assessments, example_students, caplog):
    results = [
        Result("a1", "s1", 80),
        Result("a9", "s1", 10),
        Result("a1", "s9", 10),
    ]

    with caplog.at_level(logging.WARNING, logger="core.aggregator"):
        summary = aggregate_gradebook(example_assessments, example_students, results)

    s1 = next(row for row in summary.rows if row.student.id == "s1")

    assert math.isclose(s1.total_weighted_score, 32.0)
    assert "Skipped 2 result(s)" in caplog.text


def test_aggregate_with_grading_scale(
    example_assessments, example_students, example_results, sample_grading_scale
):
    summary = aggregate_gradebook(
        example_assessments, example_students, example_results, sample_grading_scale
    )

    assert summary.is_graded
    assert [row.grade for row in summary.rows] == ["A", "F"]
    assert summary.to_dict()["rows"][0]["remark"] == "Excellent"


def test_aggregate_without_grading_scale(example_assessments, example_students, example_results):
    summary = aggregate_gradebook(example_assessments, example_students, example_results)

    assert not summary.is_graded
    assert "grade" not in summary.to_dict()["rows"][0]


# === validation ===


def test_aggregate_score_above_total_marks(example_assessments, example_students):
    with pytest.raises(ValidationError) as exc_info:
        aggregate_gradebook(
            example_assessments, example_students, [Result("a2", "s1", 51)]
        )

    assert exc_info.value.record_type == "result"
    assert exc_info.value.record_id == "a2/s1"
    assert "exceeds total marks" in str(exc_info.value)


def test_aggregate_duplicate_result(example_assessments, example_students):
    results = [Result("a1", "s1", 80), Result("a1", "s1", 70)]

    with pytest.raises(ValidationError, match="More than one result"):
        aggregate_gradebook(example_assessments, example_students, results)


def test_aggregate_duplicate_assessment_id(example_students):
    assessments = [
        Assessment("a1", "Quiz 1", 20, 50),
        Assessment("a1", "Quiz 1 again", 20, 50),
    ]

    with pytest.raises(ValidationError, match="Duplicate assessment id"):
        aggregate_gradebook(assessments, example_students, [])


def test_aggregate_duplicate_student_id(example_assessments, example_students):
    students = [*example_students, example_students[0]]

    with pytest.raises(ValidationError, match="Duplicate student id"):
        aggregate_gradebook(example_assessments, students, [])


def test_aggregate_no_assessments(example_students):
    with pytest.raises(EmptyScopeError):
        aggregate_gradebook([], example_students, [])


def test_aggregate_no_students(example_assessments):
    with pytest.raises(EmptyScopeError):
        aggregate_gradebook(example_assessments, [], [])


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)


# === payload ===


def test_aggregate_payload(example_payload):
    summary = aggregate_payload(example_payload)

    assert [row.student.id for row in summary.rows] == ["s1", "s2"]
    assert math.isclose(summary.rows[0].total_weighted_score, 80.0)
    assert math.isclose(summary.rows[1].total_weighted_score, 36.0)
    assert summary.total_weight == 100.0


def test_aggregate_payload_zero_total_marks(example_payload):
    example_payload["assessments"][0]["totalMarks"] = 0

    with pytest.raises(ValidationError) as exc_info:
        aggregate_payload(example_payload)

    assert exc_info.value.record_type == "assessment"
    assert exc_info.value.record_id == "a1"


@pytest.mark.parametrize("weight", [-10, 150])
def test_aggregate_payload_weight_out_of_range(example_payload, weight):
    example_payload["assessments"][1]["weight"] = weight

    with pytest.raises(ValidationError) as exc_info:
        aggregate_payload(example_payload)

    assert exc_info.value.record_type == "assessment"
    assert exc_info.value.record_id == "a2"


def test_aggregate_payload_negative_score(example_payload):
    example_payload["results"][0]["score"] = -5

    with pytest.raises(ValidationError) as exc_info:
        aggregate_payload(example_payload)

    assert exc_info.value.record_id == "a1/s1"


def test_aggregate_payload_missing_field(example_payload):
    del example_payload["students"][1]["admissionNumber"]

    with pytest.raises(ValidationError, match="Missing required field"):
        aggregate_payload(example_payload)


def test_aggregate_payload_not_a_mapping():
    with pytest.raises(ValidationError):
        aggregate_payload(["not", "a", "payload"])


# === build_gradebook ===


def test_build_gradebook_success(example_assessments, example_students, example_results):
    response = build_gradebook(example_assessments, example_students, example_results)

    assert response.success
    assert response.status_code == 200
    assert len(response.data["summary"]) == 2


def test_build_gradebook_validation_failure(example_assessments, example_students):
    response = build_gradebook(
        example_assessments, example_students, [Result("a1", "s1", 101)]
    )

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert response.status_code == 400


def test_build_gradebook_empty_scope(example_assessments):
    response = build_gradebook(example_assessments, [], [])

    assert not response.success
    assert response.error is ErrorCode.EMPTY_SCOPE
    assert response.status_code == 404
