# core/aggregator.py

"""
Weighted gradebook aggregation for a single class/subject/term scope.

Turns the assessments, students, and raw results of one scope into ranked per-student rows:

    percentage           = score / total_marks
    weighted             = percentage * weight
    total_weighted_score = sum of weighted over the assessments the student has a score for

Rows are sorted by total descending. Students with equal totals keep their relative order
from the input student list. Every input student gets exactly one row, including students
with no results at all (total 0, every cell missing).

The aggregation is pure: it reads its inputs, never mutates them, and performs no I/O.
Invalid input rejects the whole batch with a `ValidationError` before any row is built.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Sequence

from core.exceptions import EmptyScopeError, ValidationError
from core.response import ErrorCode, Response
from core.settings import settings
from models.assessment import Assessment
from models.gradebook_row import GradebookRow, GradebookSummary, ScoreCell
from models.grading_scale import GradingScale
from models.result import Result
from models.student import Student

logger = logging.getLogger(__name__)


# === public api ===


def aggregate_gradebook(
    assessments: Sequence[Assessment],
    students: Sequence[Student],
    results: Sequence[Result],
    grading_scale: GradingScale | None = None,
) -> GradebookSummary:
    """
    Builds the ranked, weighted gradebook for one scope.

    Args:
        assessments (Sequence[Assessment]): The scope's assessments, in display order.
        students (Sequence[Student]): The scope's students, in tie-break order.
        results (Sequence[Result]): Raw scores. May be sparse.
        grading_scale (GradingScale | None): Optional scale used to attach a grade band to each row.

    Returns:
        GradebookSummary: Rows sorted by weighted total (descending, stable) and the sum of all
        assessment weights.

    Raises:
        ValidationError:
            - If an assessment has total marks <= 0, a weight outside 0-100, or a duplicate id.
            - If a student id appears twice.
            - If a result score is negative, exceeds its assessment's total marks, or a second
              result exists for the same (assessment, student) pair.
        EmptyScopeError: If the scope has no assessments or no students.

    Notes:
        - Results that reference an assessment or student outside the scope are skipped.
        - A total weight other than 100 is logged but is not an error.
    """
    assessments_by_id = _validate_assessments(assessments)
    _validate_students(students)
    score_index = _index_results(results, assessments_by_id, students)

    if not assessments:
        raise EmptyScopeError("There are no assessments for this class, subject, and term.")

    if not students:
        raise EmptyScopeError("There are no students for this class, subject, and term.")

    total_weight = sum(assessment.weight for assessment in assessments)

    if abs(total_weight - settings.expected_total_weight) > 1e-9:
        logger.warning(
            "Assessment weights sum to %g%%, expected %g%%",
            total_weight,
            settings.expected_total_weight,
        )

    rows = [
        _build_row(student, assessments, score_index, grading_scale)
        for student in students
    ]

    # sorted() is stable with reverse=True, ties keep student input order
    rows = sorted(rows, key=lambda row: row.total_weighted_score, reverse=True)

    logger.debug(
        "Aggregated %d students across %d assessments (%d results)",
        len(students),
        len(assessments),
        len(score_index),
    )

    return GradebookSummary(
        rows=rows,
        total_weight=total_weight,
        graded=grading_scale is not None,
    )


def aggregate_payload(
    payload: dict[str, Any],
    grading_scale: GradingScale | None = None,
) -> GradebookSummary:
    """
    Builds the gradebook from a raw records payload.

    Args:
        payload (dict[str, Any]): A mapping with "assessments", "students", and "results" lists of
            camelCase dictionaries, as returned by the academic records store.
        grading_scale (GradingScale | None): Optional scale, see `aggregate_gradebook()`.

    Raises:
        ValidationError: If the payload is malformed or any record fails validation. The error
            names the offending record.
        EmptyScopeError: See `aggregate_gradebook()`.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Gradebook payload must be a mapping.")

    assessments = _convert_records(
        payload.get("assessments", []), Assessment.from_dict, "assessment"
    )
    students = _convert_records(payload.get("students", []), Student.from_dict, "student")
    results = _convert_records(payload.get("results", []), Result.from_dict, "result")

    return aggregate_gradebook(assessments, students, results, grading_scale)


def build_gradebook(
    assessments: Sequence[Assessment],
    students: Sequence[Student],
    results: Sequence[Result],
    grading_scale: GradingScale | None = None,
) -> Response:
    """
    Non-raising wrapper around `aggregate_gradebook()`.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the gradebook was aggregated.
                - False if the input is invalid or the scope is empty.
            - detail (str | None):
                - On failure, a human-readable description of the error.
                - On success, None.
            - error (ErrorCode | str | None):
                - `ErrorCode.VALIDATION_FAILED` if a record is malformed.
                - `ErrorCode.EMPTY_SCOPE` if there are no assessments or no students.
                - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
            - status_code (int | None):
                - 200 on success
                - 404 if the scope is empty
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "summary" (GradebookSummary): The ranked rows and total weight.
                - On failure:
                    - None
    """
    try:
        summary = aggregate_gradebook(assessments, students, results, grading_scale)

    except ValidationError as e:
        return Response.fail(
            detail=f"Invalid gradebook data: {e}",
            error=ErrorCode.VALIDATION_FAILED,
        )

    except EmptyScopeError as e:
        return Response.fail(
            detail=str(e),
            error=ErrorCode.EMPTY_SCOPE,
            status_code=404,
        )

    except Exception as e:
        logger.exception("Unexpected error while aggregating gradebook")
        return Response.fail(
            detail=f"Unexpected error: {e}",
            error=ErrorCode.INTERNAL_ERROR,
            trace=traceback.format_exc(),
        )

    else:
        return Response.succeed(
            data={
                "summary": summary,
            },
        )


# === validation ===


def _validate_assessments(assessments: Sequence[Assessment]) -> dict[str, Assessment]:
    assessments_by_id: dict[str, Assessment] = {}

    for assessment in assessments:
        try:
            Assessment.validate_total_marks_input(assessment.total_marks)
            Assessment.validate_weight_input(assessment.weight)

        except (ValueError, TypeError) as e:
            raise ValidationError(str(e), "assessment", assessment.id) from e

        if assessment.id in assessments_by_id:
            raise ValidationError(
                "Duplicate assessment id in scope.", "assessment", assessment.id
            )

        assessments_by_id[assessment.id] = assessment

    return assessments_by_id


def _validate_students(students: Sequence[Student]) -> None:
    seen: set[str] = set()

    for student in students:
        if student.id in seen:
            raise ValidationError("Duplicate student id in scope.", "student", student.id)

        seen.add(student.id)


def _index_results(
    results: Sequence[Result],
    assessments_by_id: dict[str, Assessment],
    students: Sequence[Student],
) -> dict[tuple[str, str], float]:
    """
    Builds a (student_id, assessment_id) -> score lookup, validating each in-scope result.
    """
    student_ids = {student.id for student in students}
    score_index: dict[tuple[str, str], float] = {}
    skipped = 0

    for result in results:
        result_id = f"{result.assessment_id}/{result.student_id}"
        assessment = assessments_by_id.get(result.assessment_id)

        if assessment is None or result.student_id not in student_ids:
            skipped += 1
            continue

        try:
            Result.validate_score_input(result.score)
            result.validate_against_total_marks(assessment.total_marks)

        except (ValueError, TypeError) as e:
            raise ValidationError(str(e), "result", result_id) from e

        key = (result.student_id, result.assessment_id)

        if key in score_index:
            raise ValidationError(
                "More than one result recorded for this student and assessment.",
                "result",
                result_id,
            )

        score_index[key] = result.score

    if skipped:
        logger.warning("Skipped %d result(s) outside the gradebook scope", skipped)

    return score_index


def _convert_records(
    data: Any,
    from_dict_fn: Callable[[dict[str, Any]], Any],
    record_name: str,
) -> list[Any]:
    if not isinstance(data, list):
        raise ValidationError(f"Expected a list of {record_name} records.")

    records = []

    for record_dict in data:
        if not isinstance(record_dict, dict):
            raise ValidationError(f"Expected each {record_name} record to be a mapping.")

        record_id = _record_label(record_dict, record_name)

        try:
            records.append(from_dict_fn(record_dict))

        except KeyError as e:
            raise ValidationError(f"Missing required field {e}.", record_name, record_id) from e

        except (ValueError, TypeError) as e:
            raise ValidationError(str(e), record_name, record_id) from e

    return records


def _record_label(record_dict: dict[str, Any], record_name: str) -> str | None:
    if record_name == "result":
        return f"{record_dict.get('assessmentId')}/{record_dict.get('studentId')}"

    return record_dict.get("id")


# === row construction ===


def _build_row(
    student: Student,
    assessments: Sequence[Assessment],
    score_index: dict[tuple[str, str], float],
    grading_scale: GradingScale | None,
) -> GradebookRow:
    total_weighted_score = 0.0
    cells = []

    for assessment in assessments:
        raw_score = score_index.get((student.id, assessment.id))

        if raw_score is None:
            cells.append(ScoreCell.missing())
            continue

        percentage = raw_score / assessment.total_marks
        weighted = percentage * assessment.weight
        total_weighted_score += weighted

        cells.append(ScoreCell(raw_score, weighted, percentage * 100))

    grade_band = grading_scale.band_for(total_weighted_score) if grading_scale else None

    return GradebookRow(student, cells, total_weighted_score, grade_band)
