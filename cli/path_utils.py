# cli/path_utils.py

import os

from core.formatters import sanitize_name
from core.settings import settings


def get_records_dir(school_name: str, user_input: str | None) -> str:
    """
    Resolves a save directory path for new academic records based on user input or the default location.

    Args:
        school_name (str): The sanitized school name.
        user_input (str | None): An optional user-specified directory path. If None, the default path is used.

    Returns:
        A path string. If user input is provided, it is expanded and returned directly.
        Otherwise, defaults to `<settings.records_dir>/<school_name>`.
    """
    if user_input is not None:
        return os.path.expanduser(user_input.strip())
    else:
        return os.path.join(settings.records_dir, school_name)


def resolve_records_dir(school_name: str, dir_input: str | None) -> str:
    """
    Produces and ensures a valid save directory path for new academic records.

    Notes:
        - Sanitizes the school name.
        - Creates the directory path on disk (including parent directories) if it does not exist.
    """
    save_dir = get_records_dir(sanitize_name(school_name), dir_input)

    os.makedirs(save_dir, exist_ok=True)

    return save_dir


def resolve_export_path(filename: str, dir_input: str | None) -> str:
    """
    Joins an export filename with the user's directory, or `settings.export_dir` if none was given.
    """
    export_dir = (
        os.path.expanduser(dir_input.strip()) if dir_input else settings.export_dir
    )

    return os.path.join(export_dir, filename)


def dir_is_empty(dir_path: str) -> bool:
    """
    Checks whether a directory exists and contains no files.

    Returns:
        True if the path exists, is a directory, and contains no files or subdirectories. False otherwise.
    """
    return os.path.isdir(dir_path) and not os.listdir(dir_path)
