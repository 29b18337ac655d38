# cli/main.py

"""
Start Menu for the Subject Gradebook CLI.

Provides functions for creating or loading a set of academic records.
"""

import logging
import os
from textwrap import dedent
from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import records_menu
from cli.path_utils import dir_is_empty, resolve_records_dir
from core.logging_config import setup_logging
from core.settings import settings
from models.academic_records import AcademicRecords

logger = logging.getLogger(__name__)


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    setup_logging(settings.log_level)
    logger.debug("Starting Subject Gradebook CLI")

    title = formatters.format_banner_text("SUBJECT GRADEBOOK")
    options = [
        ("Create new academic records", create_records),
        ("Load existing academic records", load_records),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            records = menu_response()

            if records is not None:
                records_menu.run(records)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def create_records() -> AcademicRecords | None:
    """
    Prompts the user to create new `AcademicRecords` by collecting the school name and optional save directory.

    Returns:
        AcademicRecords: A new instance if successfully created.
        None: If the user cancels during input or if creation fails.

    Notes:
        - If the save directory input is left blank, records are stored in `<records_dir>/<school>`.
        - If the resolved directory exists and is not empty, the user must explicitly confirm before continuing.
    """
    while True:
        school_name = helpers.prompt_user_input_or_cancel(
            "Enter the school name (leave blank to cancel):"
        )

        if school_name is MenuSignal.CANCEL:
            return None
        school_name = cast(str, school_name)

        dir_input = helpers.prompt_user_input_or_none(
            "Enter directory to save the records (leave blank to use default):"
        )

        dir_path = resolve_records_dir(school_name, dir_input)

        if os.path.exists(dir_path) and not dir_is_empty(dir_path):
            warning_banner = formatters.format_banner_text("WARNING!")
            print(f"\n{warning_banner}")
            print(
                dedent(
                    """\
                    The selected directory is not empty and may contain existing data.
                    Writing to this directory may result in the loss of existing data."""
                )
            )

            if not helpers.confirm_action("\nDo you wish to continue?"):
                continue

        print("\nCreating academic records ...")

        records_response = AcademicRecords.create(school_name, dir_path)

        if not records_response.success:
            helpers.display_response_failure(records_response)
            continue

        print("... Academic records created successfully.")

        return records_response.data["records"]


def load_records() -> AcademicRecords | None:
    """
    Prompts the user to load `AcademicRecords` from a specified directory path.

    Returns:
        AcademicRecords: The loaded instance if loading succeeds.
        None: If the user cancels.
    """
    while True:
        dir_path = helpers.prompt_user_input_or_cancel(
            "Enter path to the records directory (leave blank to cancel):"
        )

        if dir_path is MenuSignal.CANCEL:
            return None
        dir_path = cast(str, dir_path)

        dir_path = os.path.abspath(os.path.expanduser(dir_path))

        if not os.path.isdir(dir_path):
            print(f"\nDirectory not found: {dir_path}. Please try again.")
            continue

        print("\nLoading academic records ...")

        records_response = AcademicRecords.load(dir_path)

        if not records_response.success:
            helpers.display_response_failure(records_response)
            continue

        print("... Academic records loaded successfully.")

        return records_response.data["records"]


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
