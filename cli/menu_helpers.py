# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the Subject Gradebook application.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for and validating user input
- Handling user selections and confirmation flows
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior and reduce duplication.
"""

from enum import Enum
from typing import Any, Callable, Iterable

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.response import Response
from core.settings import settings
from models.academic_records import AcademicRecords
from models.assessment import Assessment
from models.student import Student


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    DEFAULT = "DEFAULT"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


# === confirmation and input prompts ===

# ---
# Blank input is treated as a signal:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL`.
#     - `prompt_user_input_or_none()` returns `None`.
# `confirm_action()` loops until the user enters a valid yes/no response.
# ---


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def confirm_unsaved_changes() -> bool:
    return confirm_action(
        "There are unsaved changes to the academic records. Do you want to save now?"
    )


def prompt_if_dirty(records: AcademicRecords) -> None:
    if records.has_unsaved_changes and confirm_unsaved_changes():
        save_response = records.save()

        if not save_response.success:
            display_response_failure(save_response)


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


def prompt_number_or_cancel(
    prompt: str, validator: Callable[[Any], float]
) -> float | MenuSignal:
    """
    Loops a prompt until the input passes `validator` or the user cancels with blank input.

    Args:
        prompt (str): The prompt text.
        validator (Callable[[Any], float]): A model validator such as `Result.validate_score_input`.

    Returns:
        The validated number, or `MenuSignal.CANCEL`.
    """
    while True:
        raw = prompt_user_input_or_cancel(prompt)

        if raw is MenuSignal.CANCEL:
            return MenuSignal.CANCEL

        try:
            return validator(raw)

        except (TypeError, ValueError) as e:
            print(f"\n[ERROR] {e} Please try again.")


# === finder and select methods ===


def prompt_selection_from_list(
    list_data: list[Any],
    list_description: str,
    sort_key: Callable[[Any], Any] = lambda x: x,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> Any | None:
    """
    Prompts the user to select an item from a list of records.

    Args:
        list_data (list[Any]): The records to choose from.
        list_description (str): A short description used in prompts and headings (e.g. "students").
        sort_key (Callable[[Any], Any], optional): Sort function for ordering the list. Defaults to identity.
        formatter (Callable[[Any], str], optional): Function to convert each record to a display string. Defaults to str().

    Returns:
        The selected record if a valid index is chosen, or None if the list is empty or the user cancels with "0".
    """
    if not list_data:
        print(f"\nThere are no {list_description.lower()}.")
        return None

    sorted_list = sorted(list_data, key=sort_key)

    while True:
        print(f"\n{formatters.format_banner_text(list_description)}")

        display_results(sorted_list, True, formatter)

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return None

        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError
            return sorted_list[index]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def find_student_from_list(records: AcademicRecords) -> Student | MenuSignal:
    student = prompt_selection_from_list(
        list(records.students.values()),
        "Students",
        sort_key=lambda s: (s.last_name.lower(), s.first_name.lower()),
        formatter=model_formatters.format_student_oneline,
    )

    return MenuSignal.CANCEL if student is None else student


def find_assessment_from_list(records: AcademicRecords) -> Assessment | MenuSignal:
    assessment = prompt_selection_from_list(
        list(records.assessments.values()),
        "Assessments",
        sort_key=lambda a: (a.class_id or "", a.subject_id or "", a.term_id or "", a.title.lower()),
        formatter=model_formatters.format_assessment_oneline,
    )

    return MenuSignal.CANCEL if assessment is None else assessment


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> None:
    caution_banner = formatters.format_banner_text("CAUTION!")
    print(f"\n{caution_banner}")


def display_response_failure(response: Response, debug: bool | None = None) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Args:
        response (Response): The response object to inspect.
        debug (bool | None, optional): If True, prints the trace field when present. Defaults to
            True when the configured log level is DEBUG.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")

    if debug is None:
        debug = settings.log_level == "DEBUG"

    if debug and response.trace:
        print(f"\nDebug Trace: {response.trace}")
