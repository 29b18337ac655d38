# cli/menus/assessments_menu.py

"""
Manage Assessments and Results menu for the Subject Gradebook CLI.

This module defines the interface for:
- Adding assessments to a class/subject/term
- Removing assessments (and the results recorded against them)
- Viewing assessments
- Recording and viewing results for an assessment

Results are entered student-by-student for the assessment's class, staged locally, and written
to the records in a single all-or-nothing batch via `AcademicRecords.record_results()`.
"""

from typing import Any, cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.utils import generate_uuid, parse_iso_date
from models.academic_records import AcademicRecords
from models.assessment import Assessment, AssessmentType
from models.result import Result


def run(records: AcademicRecords) -> None:
    """
    Top-level loop with dispatch for the Manage Assessments and Results menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Manage Assessments and Results")
    options = [
        ("Add Assessment", add_assessment),
        ("Remove Assessment", find_and_remove_assessment),
        ("View Assessments", view_assessments),
        ("Record Results", find_assessment_and_record_results),
        ("View Results", find_assessment_and_view_results),
    ]
    zero_option = "Return to Records Manager menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response(records)

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(records)

    helpers.returning_to("Records Manager menu")


# === add assessment ===


def add_assessment(records: AcademicRecords) -> None:
    new_assessment = prompt_new_assessment()

    if new_assessment is None:
        helpers.returning_without_changes()
        return

    print(f"\n{model_formatters.format_assessment_multiline(new_assessment)}")

    if not helpers.confirm_action("Would you like to add this assessment?"):
        helpers.returning_without_changes()
        return

    records_response = records.add_assessment(new_assessment)

    if not records_response.success:
        helpers.display_response_failure(records_response)

    else:
        print(f"\n{records_response.detail}")


def prompt_new_assessment() -> Assessment | None:
    """
    Collects the fields of a new `Assessment`, treating blank input as 'cancel'.

    Returns:
        A new `Assessment` object, or None if the user cancels or the input is invalid.
    """
    text_fields: dict[str, str] = {}

    for field, prompt in [
        ("title", "Enter assessment title (leave blank to cancel):"),
        ("class_id", "Enter class ID (leave blank to cancel):"),
        ("subject_id", "Enter subject ID (leave blank to cancel):"),
        ("term_id", "Enter term ID (leave blank to cancel):"),
    ]:
        value = helpers.prompt_user_input_or_cancel(prompt)

        if value is MenuSignal.CANCEL:
            return None
        text_fields[field] = cast(str, value)

    type_options = ", ".join(t.value for t in AssessmentType)
    assessment_type = helpers.prompt_user_input_or_cancel(
        f"Enter assessment type ({type_options}; leave blank to cancel):"
    )

    if assessment_type is MenuSignal.CANCEL:
        return None

    total_marks = helpers.prompt_number_or_cancel(
        "Enter total marks (leave blank to cancel):",
        Assessment.validate_total_marks_input,
    )

    if total_marks is MenuSignal.CANCEL:
        return None

    weight = helpers.prompt_number_or_cancel(
        "Enter weight as a percentage of the term total (leave blank to cancel):",
        Assessment.validate_weight_input,
    )

    if weight is MenuSignal.CANCEL:
        return None

    date_input = helpers.prompt_user_input_or_none(
        "Enter assessment date as YYYY-MM-DD (leave blank for no date):"
    )

    try:
        date = parse_iso_date(date_input)

        return Assessment(
            id=generate_uuid(),
            total_marks=cast(float, total_marks),
            weight=cast(float, weight),
            type=cast(str, assessment_type),
            date=date,
            **text_fields,
        )

    except (TypeError, ValueError) as e:
        print(f"\n[ERROR] Could not create assessment: {e}")
        return None


# === remove assessment ===


def find_and_remove_assessment(records: AcademicRecords) -> None:
    assessment = helpers.find_assessment_from_list(records)

    if assessment is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    assessment = cast(Assessment, assessment)

    helpers.caution_banner()
    print(f"You are about to remove {assessment.title} and every result recorded for it.")

    if not helpers.confirm_action("Are you sure you want to continue?"):
        helpers.returning_without_changes()
        return

    records_response = records.remove_assessment(assessment)

    if not records_response.success:
        helpers.display_response_failure(records_response)

    else:
        print(f"\n{records_response.detail}")


# === view assessments ===


def view_assessments(records: AcademicRecords) -> None:
    banner = formatters.format_banner_text("Assessments")
    print(f"\n{banner}")

    if not records.assessments:
        print("There are no assessments.")
        return

    helpers.display_results(
        sorted(
            records.assessments.values(),
            key=lambda a: (a.class_id or "", a.subject_id or "", a.term_id or "", a.title.lower()),
        ),
        formatter=model_formatters.format_assessment_oneline,
    )


# === record results ===


def find_assessment_and_record_results(records: AcademicRecords) -> None:
    assessment = helpers.find_assessment_from_list(records)

    if assessment is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    record_results(records, cast(Assessment, assessment))


def record_results(records: AcademicRecords, assessment: Assessment) -> None:
    """
    Prompts for a score for each student in the assessment's class and records them as one batch.

    Notes:
        - Blank input skips a student; "q" stops entering scores early.
        - Existing scores are shown and overwritten when a new score is entered.
        - Nothing is written unless the user confirms the staged batch.
    """
    students = sorted(
        (s for s in records.students.values() if s.class_id == assessment.class_id),
        key=lambda s: s.last_name.lower(),
    )

    if not students:
        print(f"\nThere are no students in class {assessment.class_id}.")
        return

    total_marks = formatters.format_number(assessment.total_marks)
    staged: list[dict[str, Any]] = []

    for student in students:
        existing = records.results.get((assessment.id, student.id))
        current = (
            f" [current: {formatters.format_number(existing.score)}]" if existing else ""
        )

        while True:
            raw = helpers.prompt_user_input(
                f"{student.full_name}{current} - score out of {total_marks} (blank to skip, q to stop):"
            )

            if raw == "" or raw.lower() == "q":
                break

            try:
                score = Result.validate_score_input(raw)

                if score > assessment.total_marks:
                    raise ValueError(f"Score cannot exceed {total_marks}.")

            except (TypeError, ValueError) as e:
                print(f"\n[ERROR] {e} Please try again.")
                continue

            staged.append({"studentId": student.id, "score": score})
            break

        if raw.lower() == "q":
            break

    if not staged:
        print("\nNo scores were entered.")
        helpers.returning_without_changes()
        return

    if not helpers.confirm_action(f"Record {len(staged)} score(s) for {assessment.title}?"):
        helpers.returning_without_changes()
        return

    records_response = records.record_results(assessment.id, staged)

    if not records_response.success:
        helpers.display_response_failure(records_response)

    else:
        print(f"\n{records_response.detail}")


# === view results ===


def find_assessment_and_view_results(records: AcademicRecords) -> None:
    assessment = helpers.find_assessment_from_list(records)

    if assessment is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    assessment = cast(Assessment, assessment)

    results = [r for r in records.results.values() if r.assessment_id == assessment.id]

    banner = formatters.format_banner_text(f"Results: {assessment.title}")
    print(f"\n{banner}")

    if not results:
        print("No results have been recorded.")
        return

    for result in sorted(results, key=lambda r: r.score, reverse=True):
        student = records.students[result.student_id]
        print(model_formatters.format_result_oneline(result, student, assessment))
