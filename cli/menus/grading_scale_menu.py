# cli/menus/grading_scale_menu.py

"""
Manage Grading Scale menu for the Subject Gradebook CLI.

A grading scale maps a weighted gradebook total to a letter grade. Bands may not overlap.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.academic_records import AcademicRecords
from models.grading_scale import GradeBand


def run(records: AcademicRecords) -> None:
    title = formatters.format_banner_text("Manage Grading Scale")
    options = [
        ("Add Grade", add_grade_band),
        ("Remove Grade", remove_grade_band),
        ("View Grading Scale", view_grading_scale),
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


def add_grade_band(records: AcademicRecords) -> None:
    grade = helpers.prompt_user_input_or_cancel("Enter grade label, e.g. A (leave blank to cancel):")

    if grade is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    bounds = []

    for label in ("Minimum score", "Maximum score"):
        bound = helpers.prompt_number_or_cancel(
            f"Enter {label.lower()} from 0 to 100 (leave blank to cancel):",
            lambda raw, label=label: GradeBand.validate_score_bound(raw, label),
        )

        if bound is MenuSignal.CANCEL:
            helpers.returning_without_changes()
            return
        bounds.append(cast(float, bound))

    remark = helpers.prompt_user_input_or_none("Enter a remark, e.g. Excellent (optional):")

    try:
        band = GradeBand(cast(str, grade), bounds[0], bounds[1], remark)

    except (TypeError, ValueError) as e:
        print(f"\n[ERROR] Could not create grade: {e}")
        return

    records_response = records.add_grade_band(band)

    if not records_response.success:
        helpers.display_response_failure(records_response)

    else:
        print(f"\n{records_response.detail}")


def remove_grade_band(records: AcademicRecords) -> None:
    band = helpers.prompt_selection_from_list(
        records.grading_scale.bands,
        "Grades",
        sort_key=lambda b: -b.min_score,
        formatter=model_formatters.format_grade_band_oneline,
    )

    if band is None:
        helpers.returning_without_changes()
        return

    records_response = records.remove_grade_band(band.grade)

    if not records_response.success:
        helpers.display_response_failure(records_response)

    else:
        print(f"\n{records_response.detail}")


def view_grading_scale(records: AcademicRecords) -> None:
    banner = formatters.format_banner_text("Grading Scale")
    print(f"\n{banner}")

    if records.grading_scale.is_empty:
        print("No grades have been defined. Gradebooks will not show letter grades.")
        return

    helpers.display_results(
        records.grading_scale.bands,
        formatter=model_formatters.format_grade_band_oneline,
    )
