# cli/menus/students_menu.py

"""
Manage Students menu for the Subject Gradebook CLI.

Supports adding students to a class, removing students (together with their results),
and viewing the student roster.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.utils import generate_uuid
from models.academic_records import AcademicRecords
from models.student import Student


def run(records: AcademicRecords) -> None:
    """
    Top-level loop with dispatch for the Manage Students menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Manage Students")
    options = [
        ("Add Student", add_student),
        ("Remove Student", find_and_remove_student),
        ("View Students", view_students),
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


# === add student ===


def add_student(records: AcademicRecords) -> None:
    """
    Loops a prompt to create a new `Student` object and add it to the records.

    Notes:
        - Additions are not saved automatically.
    """
    while True:
        new_student = prompt_new_student()

        if new_student is not None:
            print(f"\n{model_formatters.format_student_multiline(new_student)}")

            if helpers.confirm_action("Would you like to add this student?"):
                records_response = records.add_student(new_student)

                if not records_response.success:
                    helpers.display_response_failure(records_response)
                    print(f"\n{new_student.full_name} was not added.")

                else:
                    print(f"\n{records_response.detail}")

        if not helpers.confirm_action("Would you like to continue adding new students?"):
            break

    helpers.returning_to("Manage Students menu")


def prompt_new_student() -> Student | None:
    prompts = [
        ("first_name", "Enter first name (leave blank to cancel):"),
        ("last_name", "Enter last name (leave blank to cancel):"),
        ("admission_number", "Enter admission number (leave blank to cancel):"),
        ("class_id", "Enter class ID (leave blank to cancel):"),
    ]
    values: dict[str, str] = {}

    for field, prompt in prompts:
        value = helpers.prompt_user_input_or_cancel(prompt)

        if value is MenuSignal.CANCEL:
            return None
        values[field] = cast(str, value)

    try:
        return Student(id=generate_uuid(), **values)

    except (TypeError, ValueError) as e:
        print(f"\n[ERROR] Could not create student: {e}")
        return None


# === remove student ===


def find_and_remove_student(records: AcademicRecords) -> None:
    student = helpers.find_student_from_list(records)

    if student is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    student = cast(Student, student)

    helpers.caution_banner()
    print(f"You are about to remove {student.full_name} and all of their results.")

    if not helpers.confirm_action("Are you sure you want to continue?"):
        helpers.returning_without_changes()
        return

    records_response = records.remove_student(student)

    if not records_response.success:
        helpers.display_response_failure(records_response)

    else:
        print(f"\n{records_response.detail}")


# === view students ===


def view_students(records: AcademicRecords) -> None:
    banner = formatters.format_banner_text("Students")
    print(f"\n{banner}")

    if not records.students:
        print("There are no students.")
        return

    helpers.display_results(
        sorted(
            records.students.values(),
            key=lambda s: (s.class_id or "", s.last_name.lower(), s.first_name.lower()),
        ),
        formatter=model_formatters.format_student_oneline,
    )
