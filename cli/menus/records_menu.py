# cli/menus/records_menu.py

"""
Records Manager menu for the Subject Gradebook CLI.

Provides calls to the menus for managing Students, Assessments and Results, the Grading Scale,
and Subject Gradebooks, as well as an option to save the records.
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import (
    assessments_menu,
    gradebook_menu,
    grading_scale_menu,
    students_menu,
)
from models.academic_records import AcademicRecords


def run(records: AcademicRecords) -> None:
    """
    Top-level loop with dispatch for the Records Manager menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text(records.school_name)
    options = [
        ("Manage Students", lambda: students_menu.run(records)),
        ("Manage Assessments and Results", lambda: assessments_menu.run(records)),
        ("Manage Grading Scale", lambda: grading_scale_menu.run(records)),
        ("Subject Gradebook", lambda: gradebook_menu.run(records)),
        ("Save Records", lambda: save_records(records)),
    ]
    zero_option = "Return to Start Menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response()

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(records)

    helpers.returning_to("Start Menu")


def save_records(records: AcademicRecords) -> None:
    save_response = records.save()

    if not save_response.success:
        helpers.display_response_failure(save_response)

    else:
        print(f"\n{save_response.detail}")
