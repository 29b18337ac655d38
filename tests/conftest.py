# tests/conftest.py

import datetime
import tempfile

import pytest

from models.academic_records import AcademicRecords
from models.assessment import Assessment, AssessmentType
from models.grading_scale import GradeBand, GradingScale
from models.result import Result
from models.student import Student


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def sample_records(temp_dir):
    records_response = AcademicRecords.create("Hillcrest Academy", temp_dir)
    return records_response.data["records"]


@pytest.fixture
def sample_student():
    return Student("s001", "Ada", "Okafor", "hc-2024-001", "JSS1A")


@pytest.fixture
def sample_assessment():
    return Assessment(
        id="a001",
        title="Midterm Test",
        total_marks=50.0,
        weight=30.0,
        type=AssessmentType.TEST,
        class_id="JSS1A",
        subject_id="MATH",
        term_id="T1",
        date=datetime.date(2025, 10, 14),
    )


@pytest.fixture
def sample_result():
    return Result("a001", "s001", 42.0, "Good effort")


@pytest.fixture
def sample_grading_scale():
    return GradingScale(
        [
            GradeBand("A", 70, 100, "Excellent"),
            GradeBand("B", 60, 69.99, "Very Good"),
            GradeBand("C", 50, 59.99, "Credit"),
            GradeBand("F", 0, 49.99, "Fail"),
        ]
    )


# --- worked example: s1 -> 80, s2 -> 36, total weight 100 ---


@pytest.fixture
def example_assessments():
    return [
        Assessment("a1", "Quiz 1", 100, 40, class_id="JSS1A", subject_id="MATH", term_id="T1"),
        Assessment("a2", "Final Exam", 50, 60, AssessmentType.EXAM, "JSS1A", "MATH", "T1"),
    ]


@pytest.fixture
def example_students():
    return [
        Student("s1", "Ada", "Okafor", "ADM001", "JSS1A"),
        Student("s2", "Bayo", "Adeyemi", "ADM002", "JSS1A"),
    ]


@pytest.fixture
def example_results():
    return [
        Result("a1", "s1", 80),
        Result("a2", "s1", 40),
        Result("a1", "s2", 90),
    ]


@pytest.fixture
def example_payload():
    return {
        "assessments": [
            {"id": "a1", "title": "Quiz 1", "totalMarks": 100, "weight": 40},
            {"id": "a2", "title": "Final Exam", "totalMarks": 50, "weight": 60},
        ],
        "students": [
            {"id": "s1", "firstName": "Ada", "lastName": "Okafor", "admissionNumber": "ADM001"},
            {"id": "s2", "firstName": "Bayo", "lastName": "Adeyemi", "admissionNumber": "ADM002"},
        ],
        "results": [
            {"assessmentId": "a1", "studentId": "s1", "score": 80},
            {"assessmentId": "a2", "studentId": "s1", "score": 40},
            {"assessmentId": "a1", "studentId": "s2", "score": 90},
        ],
    }


@pytest.fixture
def populated_records(sample_records, example_assessments, example_students, example_results):
    for student in example_students:
        sample_records.add_student(student)

    for assessment in example_assessments:
        sample_records.add_assessment(assessment)

    sample_records.record_results(
        "a1",
        [{"studentId": r.student_id, "score": r.score} for r in example_results if r.assessment_id == "a1"],
    )
    sample_records.record_results(
        "a2",
        [{"studentId": r.student_id, "score": r.score} for r in example_results if r.assessment_id == "a2"],
    )

    return sample_records
