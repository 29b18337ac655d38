# models/academic_records.py

"""
The AcademicRecords model is the store of assessments, students, and raw results for a school.

Linked Students, Assessments, and Results are stored in dictionaries and written to .json upon saving,
along with the school's GradingScale and an AcademicRecords.metadata that stores school specific information.

Results are keyed by (assessment_id, student_id); at most one Result exists per pair, and recording a new
score for an existing pair overwrites it.

Provides functions for creating, loading, and saving records, adding and removing Students and Assessments,
recording Results in all-or-nothing batches, and fetching the consistent snapshot of one
class/subject/term scope that the gradebook aggregator consumes.
"""

from __future__ import annotations

import datetime
import json
import logging
import os
from typing import Any, Callable

from core.response import ErrorCode, Response
from models.assessment import Assessment
from models.grading_scale import GradeBand, GradingScale
from models.result import Result
from models.student import Student
from models.types import RecordType

logger = logging.getLogger(__name__)


class AcademicRecords:

    def __init__(self, save_dir_path: str):
        self._metadata: dict[str, Any] = {}
        self._students: dict[str, Student] = {}
        self._assessments: dict[str, Assessment] = {}
        self._results: dict[tuple[str, str], Result] = {}
        self._grading_scale: GradingScale = GradingScale()
        self._dir_path: str = save_dir_path
        self._unsaved_changes: bool = False

    # === properties ===

    # --- core data structures ---

    @property
    def students(self) -> dict[str, Student]:
        return self._students

    @property
    def assessments(self) -> dict[str, Assessment]:
        return self._assessments

    @property
    def results(self) -> dict[tuple[str, str], Result]:
        return self._results

    @property
    def grading_scale(self) -> GradingScale:
        return self._grading_scale

    # --- metadata fields ---

    @property
    def school_name(self) -> str:
        return self._metadata["school_name"]

    @property
    def path(self) -> str:
        return self._dir_path

    @path.setter
    def path(self, dir_path: str) -> None:
        self._dir_path = dir_path

    # --- status markers ---

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    # === public classmethods ===

    @classmethod
    def create(cls, school_name: str, save_dir_path: str) -> Response:
        """
        Creates, saves, and returns a new `AcademicRecords` instance.

        Args:
            school_name (str): The school name.
            save_dir_path (str): The path for writing and reading serialized data.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `AcademicRecords` object was created and saved successfully.
                    - False if invalid data is passed or the directory cannot be written.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if the school name is blank.
                    - `ErrorCode.INTERNAL_ERROR` if the initial save fails or for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "records" (AcademicRecords): The newly created object.
                    - On failure:
                        - None

        Notes:
            - This method writes to disk with `records.save()` before returning.
        """
        if not school_name or not school_name.strip():
            return Response.fail(
                detail="Missing required field: school name cannot be blank.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            records = cls(save_dir_path)
            records._metadata = {
                "school_name": school_name.strip(),
                "created_at": datetime.datetime.now().isoformat(),
            }
            save_response = records.save(save_dir_path)

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        if not save_response.success:
            return save_response

        logger.info("Created academic records for %s at %s", school_name, save_dir_path)

        return Response.succeed(
            data={
                "records": records,
            },
        )

    @classmethod
    def load(cls, save_dir_path: str) -> Response:
        """
        Loads previously serialized data from disk and returns an `AcademicRecords` instance.

        Args:
            save_dir_path (str): The directory path where the records are stored.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the load operation was successful.
                    - False for missing files, JSON deserialization issues, invalid input, or missing fields.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if a required file is missing.
                    - `ErrorCode.INVALID_INPUT` if JSONDecodeError raised.
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError raised.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if TypeError or KeyError raised.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 404 if a required file is missing
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "records" (AcademicRecords): The loaded object.
                    - On failure:
                        - None

        Notes:
            - Students and assessments are imported before results, since results are validated against them.
            - `grading_scale.json` is optional.
        """

        def read_json(filename: str) -> list[Any] | dict[str, Any]:
            with open(os.path.join(save_dir_path, filename), "r") as f:
                return json.load(f)

        def load_and_import(
            filename: str, import_fn: Callable[[list[Any]], None]
        ) -> None:
            data = read_json(filename)
            if not isinstance(data, list):
                raise ValueError(f"Expected {filename} to contain a list.")
            else:
                import_fn(data)

        try:
            records = cls(save_dir_path)

            metadata = read_json("metadata.json")
            if not isinstance(metadata, dict):
                raise ValueError("metadata.json must contain a dictionary.")
            records._metadata = metadata

            load_and_import("students.json", records.import_students)
            load_and_import("assessments.json", records.import_assessments)
            load_and_import("results.json", records.import_results)

            try:
                load_and_import("grading_scale.json", records.import_grading_scale)
            except FileNotFoundError:
                records._grading_scale = GradingScale()

        except FileNotFoundError as e:
            return Response.fail(
                detail=f"Missing records file: {e.filename}",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except (TypeError, KeyError) as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            # importing goes through the add_* methods, which mark the records dirty
            records._unsaved_changes = False

            logger.info(
                "Loaded %d students, %d assessments, %d results from %s",
                len(records.students),
                len(records.assessments),
                len(records.results),
                save_dir_path,
            )

            return Response.succeed(
                data={
                    "records": records,
                },
            )

    # === persistence and import ===

    def save(self, save_dir_path: str | None = None) -> Response:
        """
        Serializes and saves data to disk in JSON format.

        Args:
            save_dir_path (str):
                - The directory path where the records will be saved.
                - If no argument is provided, `self.path` will be used by default.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the records were saved successfully to disk.
                    - False for JSON serialization issues or write failures.
                - detail (str | None):
                    - On success:
                        - "Academic records successfully saved to disk."
                    - On failure:
                        - Description of the error if the save failed.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError or TypeError raised.
                    - `ErrorCode.INTERNAL_ERROR` if OSError raised or for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - Always None, this method does not return any payload.

        Notes:
            - The directory is created if it does not exist.
        """
        target_dir = save_dir_path or self._dir_path

        def write_json(filename: str, data: list | dict) -> None:
            with open(os.path.join(target_dir, filename), "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)

        try:
            os.makedirs(target_dir, exist_ok=True)

            write_json("metadata.json", self._metadata)
            write_json("students.json", [s.to_dict() for s in self.students.values()])
            write_json(
                "assessments.json", [a.to_dict() for a in self.assessments.values()]
            )
            write_json("results.json", [r.to_dict() for r in self.results.values()])
            write_json("grading_scale.json", self._grading_scale.to_list())

        except (ValueError, TypeError) as e:
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            self._unsaved_changes = False
            logger.info("Saved academic records to %s", target_dir)

            return Response.succeed(detail="Academic records successfully saved to disk.")

    def _import_records(
        self,
        data: list[dict[str, Any]],
        from_dict_fn: Callable[[dict[str, Any]], RecordType],
        add_fn: Callable[[RecordType], Response],
        record_name: str,
    ) -> None:
        """
        Deserializes and imports a list of records, failing fast on error.

        Raises:
            - ValueError:
                - If a record dictionary is malformed or fails validation.
            - RuntimeError:
                - If an internal error occurs during the add operation.
        """
        for record_dict in data:
            try:
                record = from_dict_fn(record_dict)
            except (ValueError, TypeError, KeyError) as e:
                raise ValueError(
                    f"Failed to deserialize {record_name}: {record_dict} - {e}"
                )

            response = add_fn(record)

            if not response.success:
                message = (
                    f"Failed to import {record_name}: {record_dict} - {response.detail}"
                )
                match response.error:
                    case ErrorCode.VALIDATION_FAILED | ErrorCode.NOT_FOUND:
                        raise ValueError(message)
                    case _:
                        raise RuntimeError(message)

    def import_students(self, student_data: list) -> None:
        self._import_records(
            data=student_data,
            from_dict_fn=Student.from_dict,
            add_fn=self.add_student,
            record_name="student",
        )

    def import_assessments(self, assessment_data: list) -> None:
        self._import_records(
            data=assessment_data,
            from_dict_fn=Assessment.from_dict,
            add_fn=self.add_assessment,
            record_name="assessment",
        )

    def import_results(self, result_data: list) -> None:
        """
        Imports a list of result records.

        Raises:
            - ValueError:
                - If any result dictionary is malformed.
                - If a result references an unknown assessment or student.
                - If a result's score exceeds its assessment's total marks.
                - If two results share the same (assessment, student) pair.
        """
        self._import_records(
            data=result_data,
            from_dict_fn=Result.from_dict,
            add_fn=self._add_result,
            record_name="result",
        )

    def import_grading_scale(self, band_data: list) -> None:
        self._grading_scale = GradingScale.from_list(band_data)

    # === data accessors ===

    def list_scopes(self) -> list[tuple[str, str, str]]:
        """
        Returns every (class_id, subject_id, term_id) triple that has at least one assessment, sorted.
        """
        scopes = {
            (a.class_id, a.subject_id, a.term_id)
            for a in self.assessments.values()
            if a.class_id and a.subject_id and a.term_id
        }

        return sorted(scopes)

    def get_gradebook_data(self, class_id: str, subject_id: str, term_id: str) -> Response:
        """
        Fetches the assessments, students, and results of one class/subject/term scope.

        Args:
            class_id (str): The class whose students are included.
            subject_id (str): The subject of the assessments.
            term_id (str): The term of the assessments.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if all three identifiers were given, even if the scope is empty.
                    - False if an identifier is missing or for unexpected errors.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if any identifier is blank.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "assessments" (list[Assessment]): In-scope assessments, oldest date first.
                        - "students" (list[Student]): Students of the class, by last name.
                        - "results" (list[Result]): Results for the in-scope assessments.
                    - On failure:
                        - None

        Notes:
            - This method is read-only.
            - Assessments without a date sort after dated ones, in insertion order.
        """
        if not class_id or not subject_id or not term_id:
            return Response.fail(
                detail="Class, subject, and term IDs are required.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            assessments = sorted(
                (
                    a
                    for a in self.assessments.values()
                    if a.in_scope(class_id, subject_id, term_id)
                ),
                key=lambda a: (a.date is None, a.date or datetime.date.min),
            )

            students = sorted(
                (s for s in self.students.values() if s.class_id == class_id),
                key=lambda s: self._normalize(s.last_name),
            )

            assessment_ids = {a.id for a in assessments}
            results = [
                r for r in self.results.values() if r.assessment_id in assessment_ids
            ]

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(
                data={
                    "assessments": assessments,
                    "students": students,
                    "results": results,
                },
            )

    # --- find record by uuid ---

    def find_record_by_uuid(
        self,
        uuid: str,
        dictionary: dict[str, RecordType],
    ) -> Response:
        """
        Finds a record by UUID within a given dictionary.

        Returns:
            Response: On success, `data["record"]` holds the matched record.
            On failure, `ErrorCode.NOT_FOUND` with status 404.

        Notes:
            - This method is read-only and does not raise.
        """
        record = dictionary.get(uuid)

        if record is None:
            return Response.fail(
                detail=f"No matching record found for {uuid}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(
            data={
                "record": record,
            },
        )

    def find_student_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self.students)

    def find_assessment_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self.assessments)

    def find_result(self, assessment_id: str, student_id: str) -> Response:
        result = self.results.get((assessment_id, student_id))

        if result is None:
            return Response.fail(
                detail=f"No result recorded for student {student_id} on assessment {assessment_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(
            data={
                "record": result,
            },
        )

    # === data manipulators ===

    def _mark_dirty(self) -> None:
        self._unsaved_changes = True

    # --- student manipulation ---

    def add_student(self, student: Student) -> Response:
        """
        Adds a `Student` object to the `records.students` dictionary.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Student` object was successfully added.
                    - False if the id or admission number is already in use.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if the id or admission number is not unique.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added `Student` object.
                    - On failure:
                        - None

        Notes:
            - This method mutates state and calls `_mark_dirty()` if successful.
        """
        try:
            self.require_unique_id(student.id, self.students, "student")
            self.require_unique_admission_number(student.admission_number)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        self.students[student.id] = student
        self._mark_dirty()

        return Response.succeed(
            detail=f"{student.full_name} successfully added to the academic records.",
            data={
                "record": student,
            },
        )

    def remove_student(self, student: Student) -> Response:
        """
        Removes a `Student` and every `Result` linked to them.

        Returns:
            Response: On success, `data["removed_results"]` holds the number of results deleted.
            `ErrorCode.NOT_FOUND` (404) if the student is not tracked.
        """
        if student.id not in self.students:
            return Response.fail(
                detail=f"No matching student could be found for deletion: {student}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        linked_keys = [k for k, r in self.results.items() if r.student_id == student.id]

        for key in linked_keys:
            del self.results[key]

        del self.students[student.id]
        self._mark_dirty()

        return Response.succeed(
            detail=f"{student.full_name} and {len(linked_keys)} linked result(s) removed.",
            data={
                "removed_results": len(linked_keys),
            },
        )

    # --- assessment manipulation ---

    def add_assessment(self, assessment: Assessment) -> Response:
        """
        Adds an `Assessment` object to the `records.assessments` dictionary.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Assessment` object was successfully added.
                    - False if the id is already in use or the title duplicates another assessment in the same scope.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if the uniqueness checks fail.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Assessment): The added `Assessment` object.

        Notes:
            - This method mutates state and calls `_mark_dirty()` if successful.
        """
        try:
            self.require_unique_id(assessment.id, self.assessments, "assessment")
            self.require_unique_assessment_title(assessment)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        self.assessments[assessment.id] = assessment
        self._mark_dirty()

        return Response.succeed(
            detail=f"{assessment.title} successfully added to the academic records.",
            data={
                "record": assessment,
            },
        )

    def remove_assessment(self, assessment: Assessment) -> Response:
        """
        Removes an `Assessment` and every `Result` recorded against it.

        Returns:
            Response: On success, `data["removed_results"]` holds the number of results deleted.
            `ErrorCode.NOT_FOUND` (404) if the assessment is not tracked.
        """
        if assessment.id not in self.assessments:
            return Response.fail(
                detail=f"No matching assessment could be found for deletion: {assessment}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        linked_keys = [k for k, r in self.results.items() if r.assessment_id == assessment.id]

        for key in linked_keys:
            del self.results[key]

        del self.assessments[assessment.id]
        self._mark_dirty()

        return Response.succeed(
            detail=f"{assessment.title} and {len(linked_keys)} linked result(s) removed.",
            data={
                "removed_results": len(linked_keys),
            },
        )

    # --- result manipulation ---

    def _add_result(self, result: Result) -> Response:
        # used by import_results(), where a duplicate pair is corrupt data rather than an update
        try:
            self._validate_result_links(result)
            self.require_unique_result(result.assessment_id, result.student_id)

        except LookupError as e:
            return Response.fail(
                detail=str(e),
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        except ValueError as e:
            return Response.fail(
                detail=f"Result validation failed: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        self.results[result.key] = result
        self._mark_dirty()

        return Response.succeed(data={"record": result})

    def record_results(self, assessment_id: str, entries: list[dict[str, Any]]) -> Response:
        """
        Records (creates or overwrites) the scores of several students on one assessment.

        Args:
            assessment_id (str): The assessment being scored.
            entries (list[dict[str, Any]]): One mapping per student with keys "studentId", "score",
                and optionally "remarks".

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if every entry was recorded.
                    - False if any entry is invalid. In that case nothing is recorded.
                - detail (str | None):
                    - On success, a summary of created and updated results.
                    - On failure, a human-readable description naming the offending entry.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if the assessment or a student cannot be found.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if an entry lacks "studentId" or "score".
                    - `ErrorCode.INVALID_FIELD_VALUE` if a score is not a number, negative, or above total marks.
                    - `ErrorCode.VALIDATION_FAILED` if the same student appears twice in the batch.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the assessment or a student cannot be found
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "recorded" (list[Result]): The stored results, in entry order.
                        - "created" (int): Number of new results.
                        - "updated" (int): Number of overwritten results.
                    - On failure:
                        - None

        Notes:
            - Every entry is validated before any result is written, so the batch is all-or-nothing.
            - This method mutates state and calls `_mark_dirty()` if successful.
        """
        assessment_response = self.find_assessment_by_uuid(assessment_id)

        if not assessment_response.success:
            return Response.fail(
                detail=f"Could not resolve assessment for results: {assessment_response.detail}",
                error=assessment_response.error,
                status_code=assessment_response.status_code,
            )

        assessment = assessment_response.data["record"]
        staged: list[Result] = []
        seen_students: set[str] = set()

        for index, entry in enumerate(entries, 1):
            try:
                result = Result(
                    assessment_id=assessment.id,
                    student_id=entry["studentId"],
                    score=entry["score"],
                    remarks=entry.get("remarks"),
                )
                self._validate_result_links(result)

            except KeyError as e:
                return Response.fail(
                    detail=f"Entry {index} is missing required field {e}.",
                    error=ErrorCode.MISSING_REQUIRED_FIELD,
                )

            except LookupError as e:
                return Response.fail(
                    detail=f"Entry {index}: {e}",
                    error=ErrorCode.NOT_FOUND,
                    status_code=404,
                )

            except (ValueError, TypeError) as e:
                return Response.fail(
                    detail=f"Entry {index}: {e}",
                    error=ErrorCode.INVALID_FIELD_VALUE,
                )

            if result.student_id in seen_students:
                return Response.fail(
                    detail=f"Entry {index}: student {result.student_id} appears more than once in this batch.",
                    error=ErrorCode.VALIDATION_FAILED,
                )

            seen_students.add(result.student_id)
            staged.append(result)

        created = sum(1 for r in staged if r.key not in self.results)

        for result in staged:
            self.results[result.key] = result

        if staged:
            self._mark_dirty()

        logger.info(
            "Recorded %d result(s) for assessment %s (%d new)",
            len(staged),
            assessment.id,
            created,
        )

        return Response.succeed(
            detail=f"{created} result(s) created and {len(staged) - created} updated for {assessment.title}.",
            data={
                "recorded": staged,
                "created": created,
                "updated": len(staged) - created,
            },
        )

    # --- grading scale manipulation ---

    def add_grade_band(self, band: GradeBand) -> Response:
        try:
            self._grading_scale.add_band(band)

        except ValueError as e:
            return Response.fail(
                detail=str(e),
                error=ErrorCode.VALIDATION_FAILED,
            )

        self._mark_dirty()

        return Response.succeed(
            detail=f"Grade {band.grade} successfully added to the grading scale.",
            data={
                "record": band,
            },
        )

    def remove_grade_band(self, grade: str) -> Response:
        try:
            band = self._grading_scale.remove_band(grade)

        except KeyError:
            return Response.fail(
                detail=f"No grade '{grade}' in the grading scale.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        self._mark_dirty()

        return Response.succeed(
            detail=f"Grade {band.grade} removed from the grading scale.",
        )

    def set_grading_scale(self, scale: GradingScale) -> Response:
        self._grading_scale = scale
        self._mark_dirty()

        return Response.succeed(detail=f"Grading scale set with {len(scale)} band(s).")

    # === data validators ===

    def require_unique_id(self, uuid: str, dictionary: dict, record_name: str) -> None:
        if uuid in dictionary:
            raise ValueError(f"A {record_name} with the id '{uuid}' already exists.")

    def require_unique_admission_number(self, admission_number: str) -> None:
        """
        Raises:
            ValueError: If a student with the same normalized admission number already exists.
        """
        normalized = self._normalize(admission_number)
        if any(
            self._normalize(s.admission_number) == normalized
            for s in self.students.values()
        ):
            raise ValueError(
                f"A student with the admission number '{admission_number}' already exists."
            )

    def require_unique_assessment_title(self, assessment: Assessment) -> None:
        """
        Validates that no assessment in the same class/subject/term shares the given title.

        Raises:
            ValueError: If a same-scope assessment with the same normalized title already exists.
        """
        normalized = self._normalize(assessment.title)
        if any(
            self._normalize(a.title) == normalized
            and (a.class_id, a.subject_id, a.term_id)
            == (assessment.class_id, assessment.subject_id, assessment.term_id)
            for a in self.assessments.values()
        ):
            raise ValueError(
                f"An assessment titled '{assessment.title}' already exists for this class, subject, and term."
            )

    def require_unique_result(self, assessment_id: str, student_id: str) -> None:
        if (assessment_id, student_id) in self.results:
            raise ValueError(
                "A result with the same linked assessment and student already exists."
            )

    def _validate_result_links(self, result: Result) -> None:
        """
        Raises:
            LookupError: If the linked assessment or student is not tracked.
            ValueError: If the score exceeds the assessment's total marks.
        """
        assessment = self.assessments.get(result.assessment_id)

        if assessment is None:
            raise LookupError(f"Assessment {result.assessment_id} not found.")

        if result.student_id not in self.students:
            raise LookupError(f"Student {result.student_id} not found.")

        result.validate_against_total_marks(assessment.total_marks)

    # === helper methods ===

    def _normalize(self, input: str) -> str:
        return input.strip().lower()
