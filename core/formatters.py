# core/formatters.py

# all pure text and number helpers
# must never import from models!


# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def sanitize_name(name: str) -> str:
    """
    Sanitizes a class, subject, or term string for use in file and directory names.

    Returns:
        The input with surrounding whitespace removed and internal spaces replaced with underscores.
    """
    return "_".join(name.split())


# === number formatters ===


def format_number(value: float) -> str:
    # 80.0 -> "80", 37.5 -> "37.5"
    return f"{value:g}"


def format_total(value: float, places: int = 1) -> str:
    return f"{value:.{places}f}"


def format_score_fraction(raw: float, total_marks: float) -> str:
    return f"{format_number(raw)} / {format_number(total_marks)}"


def numeric_cell_value(value: float) -> int | float:
    """Returns an int for integral floats so spreadsheet cells read 80 rather than 80.0."""
    return int(value) if float(value).is_integer() else value
