# tests/test_formatters.py

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.aggregator import aggregate_gradebook
from models.gradebook_row import ScoreCell


def test_format_number():
    assert formatters.format_number(80.0) == "80"
    assert formatters.format_number(37.5) == "37.5"


def test_format_total():
    assert formatters.format_total(36) == "36.0"
    assert formatters.format_total(66.666) == "66.7"


def test_sanitize_name():
    assert formatters.sanitize_name("  Basic   Science ") == "Basic_Science"


def test_numeric_cell_value():
    assert formatters.numeric_cell_value(80.0) == 80
    assert isinstance(formatters.numeric_cell_value(80.0), int)
    assert formatters.numeric_cell_value(12.5) == 12.5


def test_format_score_cell():
    assert model_formatters.format_score_cell(ScoreCell.missing()) == "-"
    assert model_formatters.format_score_cell(ScoreCell(20, 8, 40)) == "20!"
    assert model_formatters.format_score_cell(ScoreCell(30, 12, 60)) == "30"
    assert model_formatters.format_score_cell(ScoreCell(45, 27, 90)) == "45*"


def test_format_gradebook_table(example_assessments, example_students, example_results):
    summary = aggregate_gradebook(example_assessments, example_students, example_results)

    lines = model_formatters.format_gradebook_table(summary, example_assessments).splitlines()

    assert "Total %" in lines[0]
    assert lines[2].startswith("  1 | Ada Okafor")
    assert lines[2].rstrip().endswith("80.0")
    assert lines[3].rstrip().endswith("36.0")


def test_format_total_weight_status(example_assessments, example_students, example_results):
    summary = aggregate_gradebook(example_assessments, example_students, example_results)

    assert model_formatters.format_total_weight_status(summary) == "Total Weight: 100%"

