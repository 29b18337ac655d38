# tests/test_academic_records.py

import datetime
import json
import os

from core.response import ErrorCode
from models.academic_records import AcademicRecords
from models.assessment import Assessment
from models.grading_scale import GradeBand
from models.student import Student


def test_create_new_records(sample_records, temp_dir):
    assert sample_records.school_name == "Hillcrest Academy"
    assert sample_records.path == temp_dir
    assert not sample_records.has_unsaved_changes

    for filename in ["metadata.json", "students.json", "assessments.json", "results.json"]:
        assert os.path.exists(os.path.join(temp_dir, filename))


def test_create_records_blank_name(temp_dir):
    response = AcademicRecords.create("   ", temp_dir)

    assert not response.success
    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD


def test_save_and_load_records(populated_records, temp_dir, sample_grading_scale):
    populated_records.set_grading_scale(sample_grading_scale)
    assert populated_records.has_unsaved_changes

    save_response = populated_records.save()
    assert save_response.success
    assert not populated_records.has_unsaved_changes

    load_response = AcademicRecords.load(temp_dir)
    assert load_response.success

    loaded = load_response.data["records"]
    assert loaded.school_name == "Hillcrest Academy"
    assert set(loaded.students) == {"s1", "s2"}
    assert set(loaded.assessments) == {"a1", "a2"}
    assert len(loaded.results) == 3
    assert loaded.results[("a2", "s1")].score == 40.0
    assert len(loaded.grading_scale) == 4
    assert not loaded.has_unsaved_changes


def test_save_writes_camel_case_json(populated_records, temp_dir):
    populated_records.save()

    with open(os.path.join(temp_dir, "results.json")) as f:
        data = json.load(f)

    assert isinstance(data, list)
    assert len(data) == 3
    assert {"assessmentId", "studentId", "score"} <= set(data[0])


def test_load_missing_directory(temp_dir):
    response = AcademicRecords.load(os.path.join(temp_dir, "nowhere"))

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_load_without_grading_scale(populated_records, temp_dir):
    populated_records.save()
    os.remove(os.path.join(temp_dir, "grading_scale.json"))

    response = AcademicRecords.load(temp_dir)

    assert response.success
    assert response.data["records"].grading_scale.is_empty


def test_load_rejects_result_above_total_marks(populated_records, temp_dir):
    populated_records.save()
    results_path = os.path.join(temp_dir, "results.json")

    with open(results_path) as f:
        data = json.load(f)

    data[0]["score"] = 1000

    with open(results_path, "w") as f:
        json.dump(data, f)

    response = AcademicRecords.load(temp_dir)

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_load_corrupt_json(sample_records, temp_dir):
    with open(os.path.join(temp_dir, "students.json"), "w") as f:
        f.write("{not json")

    response = AcademicRecords.load(temp_dir)

    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT


# === students ===


def test_add_student(sample_records, sample_student):
    response = sample_records.add_student(sample_student)

    assert response.success
    assert sample_student in sample_records.students.values()
    assert sample_records.has_unsaved_changes


def test_add_student_duplicate_admission_number(sample_records, sample_student):
    sample_records.add_student(sample_student)
    duplicate = Student("s002", "Tunde", "Bello", " HC-2024-001 ", "JSS1A")

    response = sample_records.add_student(duplicate)

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert "s002" not in sample_records.students


def test_remove_student_removes_results(populated_records):
    student = populated_records.students["s1"]

    response = populated_records.remove_student(student)

    assert response.success
    assert response.data["removed_results"] == 2
    assert "s1" not in populated_records.students
    assert all(r.student_id != "s1" for r in populated_records.results.values())


def test_remove_untracked_student(sample_records, sample_student):
    response = sample_records.remove_student(sample_student)

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND


# === assessments ===


def test_add_assessment(sample_records, sample_assessment):
    response = sample_records.add_assessment(sample_assessment)

    assert response.success
    assert sample_records.assessments["a001"] is sample_assessment


def test_add_assessment_duplicate_title_in_scope(sample_records, sample_assessment):
    sample_records.add_assessment(sample_assessment)
    same_scope = Assessment("a002", "midterm test", 20, 10, class_id="JSS1A", subject_id="MATH", term_id="T1")
    other_term = Assessment("a003", "Midterm Test", 20, 10, class_id="JSS1A", subject_id="MATH", term_id="T2")

    assert sample_records.add_assessment(same_scope).error is ErrorCode.VALIDATION_FAILED
    assert sample_records.add_assessment(other_term).success


def test_remove_assessment_removes_results(populated_records):
    response = populated_records.remove_assessment(populated_records.assessments["a1"])

    assert response.success
    assert response.data["removed_results"] == 2
    assert list(populated_records.results) == [("a2", "s1")]


# === results ===


def test_record_results_creates_and_updates(populated_records):
    response = populated_records.record_results(
        "a2",
        [
            {"studentId": "s1", "score": 45},
            {"studentId": "s2", "score": 30, "remarks": "Late start"},
        ],
    )

    assert response.success
    assert response.data["created"] == 1
    assert response.data["updated"] == 1
    assert populated_records.results[("a2", "s1")].score == 45.0
    assert populated_records.results[("a2", "s2")].remarks == "Late start"


def test_record_results_is_all_or_nothing(populated_records):
    response = populated_records.record_results(
        "a2",
        [
            {"studentId": "s2", "score": 30},
            {"studentId": "s1", "score": 51},
        ],
    )

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert "Entry 2" in response.detail
    assert ("a2", "s2") not in populated_records.results
    assert populated_records.results[("a2", "s1")].score == 40.0


def test_record_results_unknown_student(populated_records):
    response = populated_records.record_results("a1", [{"studentId": "s9", "score": 10}])

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_record_results_unknown_assessment(populated_records):
    response = populated_records.record_results("a9", [{"studentId": "s1", "score": 10}])

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND


def test_record_results_missing_score(populated_records):
    response = populated_records.record_results("a1", [{"studentId": "s1"}])

    assert not response.success
    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD


def test_record_results_duplicate_student_in_batch(populated_records):
    response = populated_records.record_results(
        "a2",
        [{"studentId": "s2", "score": 10}, {"studentId": "s2", "score": 20}],
    )

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert ("a2", "s2") not in populated_records.results


def test_find_result(populated_records):
    assert populated_records.find_result("a1", "s2").data["record"].score == 90.0
    assert populated_records.find_result("a2", "s2").error is ErrorCode.NOT_FOUND


# === scopes and gradebook data ===


def test_list_scopes(populated_records):
    populated_records.add_assessment(
        Assessment("a3", "Essay", 20, 10, class_id="JSS1A", subject_id="ENG", term_id="T1")
    )

    assert populated_records.list_scopes() == [("JSS1A", "ENG", "T1"), ("JSS1A", "MATH", "T1")]


def test_get_gradebook_data(populated_records):
    populated_records.add_student(Student("s3", "Chidi", "Eze", "ADM003", "JSS2B"))
    populated_records.add_assessment(
        Assessment("a0", "Pre-test", 10, 0, class_id="JSS1A", subject_id="MATH", term_id="T1",
                   date=datetime.date(2025, 9, 1))
    )

    response = populated_records.get_gradebook_data("JSS1A", "MATH", "T1")

    assert response.success
    assert [a.id for a in response.data["assessments"]] == ["a0", "a1", "a2"]
    # by last name: Adeyemi before Okafor, and s3 is in another class
    assert [s.id for s in response.data["students"]] == ["s2", "s1"]
    assert len(response.data["results"]) == 3


def test_get_gradebook_data_missing_scope(populated_records):
    response = populated_records.get_gradebook_data("JSS1A", "", "T1")

    assert not response.success
    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD


# === grading scale ===


def test_add_grade_band_overlap(sample_records):
    assert sample_records.add_grade_band(GradeBand("A", 70, 100)).success

    response = sample_records.add_grade_band(GradeBand("B", 60, 75))

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert len(sample_records.grading_scale) == 1


def test_remove_grade_band(sample_records):
    sample_records.add_grade_band(GradeBand("A", 70, 100))

    assert sample_records.remove_grade_band("A").success
    assert sample_records.remove_grade_band("A").error is ErrorCode.NOT_FOUND
