# cli/menus/gradebook_menu.py

"""
Subject Gradebook menu for the Subject Gradebook CLI.

The user picks a class/subject/term scope, and the menu then offers:
- Viewing the ranked, weighted gradebook for that scope
- Exporting it to an Excel workbook or a CSV file

The gradebook is re-aggregated from the current records every time it is viewed or exported.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.path_utils import resolve_export_path
from core.aggregator import build_gradebook
from core.export import (
    default_export_filename,
    default_export_title,
    export_gradebook_csv,
    export_gradebook_xlsx,
)
from core.response import ErrorCode, Response
from models.academic_records import AcademicRecords

Scope = tuple[str, str, str]


def run(records: AcademicRecords) -> None:
    """
    Prompts for a scope, then loops the Subject Gradebook menu for it.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    scope = prompt_scope(records)

    if scope is MenuSignal.CANCEL:
        helpers.returning_to("Records Manager menu")
        return
    scope = cast(Scope, scope)

    class_id, subject_id, term_id = scope
    title = formatters.format_banner_text(f"{subject_id} - {class_id} ({term_id})")
    options = [
        ("View Gradebook", view_gradebook),
        ("Export to Excel (.xlsx)", lambda r, s: export_gradebook(r, s, "xlsx")),
        ("Export to CSV (.csv)", lambda r, s: export_gradebook(r, s, "csv")),
    ]
    zero_option = "Return to Records Manager menu"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(records, scope)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Records Manager menu")


def prompt_scope(records: AcademicRecords) -> Scope | MenuSignal:
    scopes = records.list_scopes()

    if not scopes:
        print("\nThere are no assessments yet, so no gradebooks are available.")
        return MenuSignal.CANCEL

    scope = helpers.prompt_selection_from_list(
        scopes,
        "Class / Subject / Term",
        formatter=lambda s: " / ".join(s),
    )

    return MenuSignal.CANCEL if scope is None else scope


def aggregate_scope(records: AcademicRecords, scope: Scope) -> Response:
    """
    Fetches the scope's records and aggregates them.

    Returns:
        Response: On success, `data` holds "summary" (GradebookSummary) and "assessments"
        (list[Assessment]). Failures from the fetch or the aggregation are passed through.
    """
    data_response = records.get_gradebook_data(*scope)

    if not data_response.success:
        return data_response

    assessments = data_response.data["assessments"]
    grading_scale = None if records.grading_scale.is_empty else records.grading_scale

    gradebook_response = build_gradebook(
        assessments,
        data_response.data["students"],
        data_response.data["results"],
        grading_scale,
    )

    if not gradebook_response.success:
        return gradebook_response

    return Response.succeed(
        data={
            "summary": gradebook_response.data["summary"],
            "assessments": assessments,
        },
    )


def display_aggregate_failure(response: Response) -> None:
    if response.error is ErrorCode.EMPTY_SCOPE:
        print(f"\n{response.detail}")
    else:
        helpers.display_response_failure(response)


def view_gradebook(records: AcademicRecords, scope: Scope) -> None:
    response = aggregate_scope(records, scope)

    if not response.success:
        display_aggregate_failure(response)
        return

    summary = response.data["summary"]
    assessments = response.data["assessments"]

    class_id, subject_id, term_id = scope
    banner = formatters.format_banner_text(f"Master Gradebook: {subject_id} - {class_id}", 60)
    print(f"\n{banner}")
    print(model_formatters.format_total_weight_status(summary))
    print(f"\n{model_formatters.format_gradebook_table(summary, assessments)}")
    print("\n(- not assessed, ! below pass mark, * distinction)")


def export_gradebook(records: AcademicRecords, scope: Scope, extension: str) -> None:
    response = aggregate_scope(records, scope)

    if not response.success:
        display_aggregate_failure(response)
        return

    class_id, subject_id, _ = scope
    filename = default_export_filename(class_id, subject_id, extension)

    dir_input = helpers.prompt_user_input_or_none(
        "Enter directory for the export (leave blank to use default):"
    )
    file_path = resolve_export_path(filename, dir_input)

    export_fn = export_gradebook_xlsx if extension == "xlsx" else export_gradebook_csv
    export_response = export_fn(
        response.data["summary"],
        response.data["assessments"],
        file_path,
        title=default_export_title(class_id, subject_id),
    )

    if not export_response.success:
        helpers.display_response_failure(export_response)

    else:
        print(f"\n{export_response.detail}")
