# cli/model_formatters.py

# anything that renders domain objects or aggregated gradebooks as terminal text
from textwrap import dedent
from typing import Sequence

import core.formatters as formatters
from core.settings import settings
from models.assessment import Assessment
from models.gradebook_row import GradebookSummary, ScoreCell
from models.grading_scale import GradeBand
from models.result import Result
from models.student import Student

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    class_label = f" | Class: {student.class_id}" if student.class_id else ""

    return f"{student.full_name:<25} | {student.admission_number}{class_label}"


def format_student_multiline(student: Student) -> str:
    return dedent(
        f"""\
        Student:
        ... Name: {student.full_name}
        ... Admission No: {student.admission_number}
        ... Class: {student.class_id or '[UNASSIGNED]'}"""
    )


# === assessment formatters ===


def format_assessment_oneline(assessment: Assessment) -> str:
    scope = f"{assessment.class_id} / {assessment.subject_id} / {assessment.term_id}"

    return f"{assessment.header_label:<30} | {assessment.type.value:<8} | {scope}"


def format_assessment_multiline(assessment: Assessment) -> str:
    return dedent(
        f"""\
        Assessment:
        ... Title: {assessment.title}
        ... Type: {assessment.type.value}
        ... Total Marks: {formatters.format_number(assessment.total_marks)}
        ... Weight: {formatters.format_number(assessment.weight)}%
        ... Class: {assessment.class_id or '[UNASSIGNED]'}
        ... Subject: {assessment.subject_id or '[UNASSIGNED]'}
        ... Term: {assessment.term_id or '[UNASSIGNED]'}
        ... Date: {assessment.date_iso or '[NO DATE]'}"""
    )


# === result formatters ===


def format_result_oneline(result: Result, student: Student, assessment: Assessment) -> str:
    remarks = f" | {result.remarks}" if result.remarks else ""
    fraction = formatters.format_score_fraction(result.score, assessment.total_marks)

    return f"{student.full_name:<25} | {fraction}{remarks}"


# === grading scale formatters ===


def format_grade_band_oneline(band: GradeBand) -> str:
    score_range = f"{formatters.format_number(band.min_score)} - {formatters.format_number(band.max_score)}"
    remark = f" | {band.remark}" if band.remark else ""

    return f"{band.grade:<4} | {score_range:<11}{remark}"


# === gradebook formatters ===


def format_score_cell(cell: ScoreCell) -> str:
    if cell.is_missing:
        return settings.missing_score_placeholder

    # "!" flags scores under the pass mark, "*" flags distinctions
    if cell.percentage < settings.pass_mark:
        marker = "!"
    elif cell.percentage >= settings.distinction_mark:
        marker = "*"
    else:
        marker = ""

    return f"{formatters.format_number(cell.raw)}{marker}"


def format_total_weight_status(summary: GradebookSummary) -> str:
    total = formatters.format_number(summary.total_weight)

    if summary.weights_complete(settings.expected_total_weight):
        return f"Total Weight: {total}%"

    expected = formatters.format_number(settings.expected_total_weight)
    return f"[WARNING] Total Weight: {total}% (expected {expected}%)"


def format_gradebook_table(
    summary: GradebookSummary, assessments: Sequence[Assessment]
) -> str:
    """
    Renders the ranked gradebook as a fixed-width text table.

    Columns: position, student name, admission number, one column per assessment, total, and
    (when the summary was graded) the letter grade.
    """
    score_width = max([8, *(len(a.title) for a in assessments)])
    header_cells = [f"{'Pos':>3}", f"{'Student':<25}", f"{'Adm No':<12}"]
    header_cells += [f"{a.title[:score_width]:>{score_width}}" for a in assessments]
    header_cells.append(f"{'Total %':>8}")

    if summary.is_graded:
        header_cells.append("Grade")

    lines = [" | ".join(header_cells), "-" * len(" | ".join(header_cells))]

    for rank, row in summary.ranked():
        cells = [
            f"{rank:>3}",
            f"{row.student.full_name[:25]:<25}",
            f"{row.student.admission_number[:12]:<12}",
        ]
        cells += [f"{format_score_cell(cell):>{score_width}}" for cell in row.scores]
        cells.append(f"{formatters.format_total(row.total_weighted_score):>8}")

        if summary.is_graded:
            cells.append(row.grade)

        lines.append(" | ".join(cells))

    return "\n".join(lines)
