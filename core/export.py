# core/export.py

"""
Spreadsheet export for aggregated subject gradebooks.

The export table is row-major:

    Rank | Admission No | Student Name | <title> (<weight>%) ... | Total (%)

Rank is the 1-based position of the row in the aggregated (already sorted) summary. Missing
scores are written as the placeholder "-", never as 0, so "not assessed" stays distinct from
"scored zero". Totals are rounded to one decimal place.

Files are written with openpyxl (.xlsx) or the csv module (.csv), and can be read back with
`read_gradebook_export()`.
"""

from __future__ import annotations

import csv
import logging
import os
import traceback
from typing import Any, Sequence

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

import core.formatters as formatters
from core.response import ErrorCode, Response
from core.settings import settings
from models.assessment import Assessment
from models.gradebook_row import GradebookSummary

logger = logging.getLogger(__name__)

SHEET_TITLE = "Gradebook"
LEADING_HEADERS = ["Rank", "Admission No", "Student Name"]
TOTAL_HEADER = "Total (%)"
SUPPORTED_EXTENSIONS = (".xlsx", ".csv")

# text starting with one of these is treated as a formula by spreadsheet programs
FORMULA_PREFIXES = ("=", "+", "-", "@")


# === table construction ===


def build_export_header(assessments: Sequence[Assessment]) -> list[str]:
    return [
        *LEADING_HEADERS,
        *(assessment.header_label for assessment in assessments),
        TOTAL_HEADER,
    ]


def build_export_table(
    summary: GradebookSummary,
    assessments: Sequence[Assessment],
    placeholder: str | None = None,
) -> list[list[Any]]:
    """
    Builds the header row and one data row per student, in ranked order.

    Args:
        summary (GradebookSummary): The aggregated gradebook.
        assessments (Sequence[Assessment]): The assessments the summary was aggregated over, in the same order.
        placeholder (str | None): Text for missing scores. Defaults to `settings.missing_score_placeholder`.

    Returns:
        A list of rows. Row 0 is the header.

    Raises:
        ValueError: If a row's score cells do not line up with `assessments`.
    """
    placeholder = settings.missing_score_placeholder if placeholder is None else placeholder
    table: list[list[Any]] = [build_export_header(assessments)]

    for rank, row in summary.ranked():
        scores = row.scores

        if len(scores) != len(assessments):
            raise ValueError(
                f"Row for {row.student.full_name} has {len(scores)} score cells but {len(assessments)} assessments were given."
            )

        table.append(
            [
                rank,
                row.student.admission_number,
                row.student.full_name,
                *(
                    placeholder if cell.is_missing else formatters.numeric_cell_value(cell.raw)
                    for cell in scores
                ),
                round(row.total_weighted_score, 1),
            ]
        )

    return table


def default_export_filename(
    class_name: str, subject_name: str, extension: str = "xlsx"
) -> str:
    class_part = formatters.sanitize_name(class_name)
    subject_part = formatters.sanitize_name(subject_name)

    return f"Gradebook_{class_part}_{subject_part}.{extension.lstrip('.')}"


def default_export_title(class_name: str, subject_name: str) -> str:
    return f"Subject Gradebook: {subject_name} - {class_name}"


# === writers ===


def export_gradebook_xlsx(
    summary: GradebookSummary,
    assessments: Sequence[Assessment],
    file_path: str,
    title: str | None = None,
) -> Response:
    """
    Writes the gradebook to an Excel workbook with a single "Gradebook" sheet.

    Args:
        summary (GradebookSummary): The aggregated gradebook.
        assessments (Sequence[Assessment]): The assessments the summary was aggregated over.
        file_path (str): Destination path. Parent directories are created if missing.
        title (str | None): Optional title written in the first row, above the header.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the workbook was written.
                - False if the table cannot be built or the file cannot be written.
            - detail (str | None):
                - On success, a confirmation message naming the file.
                - On failure, a human-readable description of the error.
            - error (ErrorCode | str | None):
                - `ErrorCode.LOGIC_ERROR` if the summary and assessments do not line up.
                - `ErrorCode.INTERNAL_ERROR` if OSError raised or for unexpected errors.
            - status_code (int | None):
                - 200 on success
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "path" (str): The written file path.
                - On failure:
                    - None

    Notes:
        - This intentionally overwrites an existing file at `file_path`.
    """
    try:
        table = build_export_table(summary, assessments)

        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = SHEET_TITLE

        header_row = 1

        if title:
            _append_text_row(sheet, [title])
            sheet.cell(row=1, column=1).font = Font(bold=True, size=12)
            header_row = 2

        for row in table:
            _append_text_row(sheet, row)

        _style_sheet(sheet, header_row, column_count=len(table[0]), row_count=len(table))

        _ensure_parent_dir(file_path)
        workbook.save(file_path)

    except ValueError as e:
        return Response.fail(
            detail=f"Could not build export table: {e}",
            error=ErrorCode.LOGIC_ERROR,
        )

    except OSError as e:
        return Response.fail(
            detail=f"Failed to write workbook to disk: {e}",
            error=ErrorCode.INTERNAL_ERROR,
        )

    except Exception as e:
        logger.exception("Unexpected error while exporting gradebook to %s", file_path)
        return Response.fail(
            detail=f"Unexpected error: {e}",
            error=ErrorCode.INTERNAL_ERROR,
            trace=traceback.format_exc(),
        )

    else:
        logger.info("Exported %d gradebook rows to %s", len(table) - 1, file_path)

        return Response.succeed(
            detail=f"Gradebook exported to {file_path}.",
            data={
                "path": file_path,
            },
        )


def export_gradebook_csv(
    summary: GradebookSummary,
    assessments: Sequence[Assessment],
    file_path: str,
    title: str | None = None,
) -> Response:
    """
    Writes the gradebook to a CSV file. Same contract as `export_gradebook_xlsx()`.

    Notes:
        - Totals are written with exactly one decimal place.
        - Text that would be read as a formula is prefixed with a single quote. The placeholder is left as is.
          `read_gradebook_export()` strips the quote again.
    """
    try:
        table = build_export_table(summary, assessments)

        _ensure_parent_dir(file_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)

            if title:
                writer.writerow([_escape_csv_text(title)])

            writer.writerow([_escape_csv_text(cell) for cell in table[0]])

            for row in table[1:]:
                writer.writerow(
                    [*(_escape_csv_text(cell) for cell in row[:-1]), formatters.format_total(row[-1])]
                )

    except ValueError as e:
        return Response.fail(
            detail=f"Could not build export table: {e}",
            error=ErrorCode.LOGIC_ERROR,
        )

    except OSError as e:
        return Response.fail(
            detail=f"Failed to write CSV to disk: {e}",
            error=ErrorCode.INTERNAL_ERROR,
        )

    except Exception as e:
        logger.exception("Unexpected error while exporting gradebook to %s", file_path)
        return Response.fail(
            detail=f"Unexpected error: {e}",
            error=ErrorCode.INTERNAL_ERROR,
            trace=traceback.format_exc(),
        )

    else:
        logger.info("Exported %d gradebook rows to %s", len(table) - 1, file_path)

        return Response.succeed(
            detail=f"Gradebook exported to {file_path}.",
            data={
                "path": file_path,
            },
        )


# === reader ===


def read_gradebook_export(file_path: str) -> Response:
    """
    Reads a previously exported gradebook back into plain Python values.

    Args:
        file_path (str): Path to an exported `.xlsx` or `.csv` file.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the file was parsed.
                - False if the file is missing, has an unsupported extension, or has no header row.
            - detail (str | None):
                - On failure, a human-readable description of the error.
                - On success, None.
            - error (ErrorCode | str | None):
                - `ErrorCode.NOT_FOUND` if the file does not exist.
                - `ErrorCode.INVALID_INPUT` for unsupported or malformed files.
                - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
            - status_code (int | None):
                - 200 on success
                - 404 if the file does not exist
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "header" (list[str]): The header row.
                    - "rows" (list[dict]): One dict per student with keys "rank", "admission_number",
                      "student_name", "scores" (list[float | None]), and "total" (float).
                - On failure:
                    - None
    """
    extension = os.path.splitext(file_path)[1].lower()

    if extension not in SUPPORTED_EXTENSIONS:
        return Response.fail(
            detail=f"Unsupported export format: '{extension or file_path}'.",
            error=ErrorCode.INVALID_INPUT,
        )

    if not os.path.isfile(file_path):
        return Response.fail(
            detail=f"Export file not found: {file_path}",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    try:
        raw_rows = _read_xlsx_rows(file_path) if extension == ".xlsx" else _read_csv_rows(file_path)
        header, rows = _parse_table(raw_rows)

    except ValueError as e:
        return Response.fail(
            detail=f"Malformed gradebook export: {e}",
            error=ErrorCode.INVALID_INPUT,
        )

    except Exception as e:
        logger.exception("Unexpected error while reading %s", file_path)
        return Response.fail(
            detail=f"Unexpected error: {e}",
            error=ErrorCode.INTERNAL_ERROR,
            trace=traceback.format_exc(),
        )

    else:
        return Response.succeed(
            data={
                "header": header,
                "rows": rows,
            },
        )


# === helper methods ===


def _style_sheet(sheet: Any, header_row: int, column_count: int, row_count: int) -> None:
    header_fill = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")

    for col in range(1, column_count + 1):
        cell = sheet.cell(row=header_row, column=col)
        cell.font = Font(bold=True)
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", wrap_text=True)

    first_data_row = header_row + 1
    last_data_row = header_row + row_count - 1

    for row in range(first_data_row, last_data_row + 1):
        sheet.cell(row=row, column=column_count).number_format = "0.0"

        for col in range(4, column_count):
            sheet.cell(row=row, column=col).alignment = Alignment(horizontal="center")

    sheet.freeze_panes = f"D{first_data_row}"

    sheet.column_dimensions["A"].width = 6
    sheet.column_dimensions["B"].width = 15
    sheet.column_dimensions["C"].width = 25

    for col in range(4, column_count + 1):
        sheet.column_dimensions[get_column_letter(col)].width = 16


def _ensure_parent_dir(file_path: str) -> None:
    parent = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(parent, exist_ok=True)


def _read_xlsx_rows(file_path: str) -> list[list[Any]]:
    workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)

    try:
        sheet = workbook[SHEET_TITLE] if SHEET_TITLE in workbook.sheetnames else workbook.active
        return [list(row) for row in sheet.iter_rows(values_only=True)]

    finally:
        workbook.close()


def _read_csv_rows(file_path: str) -> list[list[Any]]:
    with open(file_path, "r", newline="", encoding="utf-8") as f:
        return [[_unescape_csv_text(cell) for cell in row] for row in csv.reader(f)]


def _parse_table(raw_rows: list[list[Any]]) -> tuple[list[str], list[dict[str, Any]]]:
    header_index = next(
        (i for i, row in enumerate(raw_rows) if row and row[0] == LEADING_HEADERS[0]),
        None,
    )

    if header_index is None:
        raise ValueError("No header row starting with 'Rank' was found.")

    header = [str(cell) for cell in raw_rows[header_index] if cell not in (None, "")]

    if len(header) < len(LEADING_HEADERS) + 1 or header[-1] != TOTAL_HEADER:
        raise ValueError(f"Header row is incomplete: {header}")

    score_count = len(header) - len(LEADING_HEADERS) - 1
    rows = []

    for raw in raw_rows[header_index + 1 :]:
        if not raw or all(cell in (None, "") for cell in raw):
            continue

        cells = list(raw[: len(header)])

        if len(cells) < len(header):
            raise ValueError(f"Row has {len(cells)} cells, expected {len(header)}: {raw}")

        rows.append(
            {
                "rank": int(cells[0]),
                "admission_number": str(cells[1]),
                "student_name": str(cells[2]),
                "scores": [_parse_score_cell(c) for c in cells[3 : 3 + score_count]],
                "total": float(cells[-1]),
            }
        )

    return header, rows


def _parse_score_cell(cell: Any) -> float | None:
    if cell is None or cell == "" or cell == settings.missing_score_placeholder:
        return None

    return float(cell)


def _append_text_row(sheet: Any, row: list[Any]) -> None:
    sheet.append(row)

    # openpyxl stores any string starting with "=" as a formula
    for cell in sheet[sheet.max_row]:
        if isinstance(cell.value, str):
            cell.data_type = "s"


def _escape_csv_text(value: Any) -> Any:
    if (
        isinstance(value, str)
        and value != settings.missing_score_placeholder
        and value.startswith(FORMULA_PREFIXES)
    ):
        return f"'{value}"

    return value


def _unescape_csv_text(value: str) -> str:
    if len(value) > 1 and value[0] == "'" and value[1:].startswith(FORMULA_PREFIXES):
        return value[1:]

    return value
