# models/student.py

"""
Represents a student enrolled in a class.

Stores identifying information: a unique ID, first and last name, the school-issued
admission number, and the class the student belongs to.

Serialization uses the camelCase keys of the academic records payload
(`firstName`, `lastName`, `admissionNumber`, `classId`).
"""

from __future__ import annotations


class Student:

    def __init__(
        self,
        id: str,
        first_name: str,
        last_name: str,
        admission_number: str,
        class_id: str | None = None,
    ):
        self._id: str = id
        self._first_name: str = first_name
        self._last_name: str = last_name
        # admission_number is validated by its setter
        self.admission_number = admission_number
        self._class_id: str | None = class_id

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @first_name.setter
    def first_name(self, first_name: str) -> None:
        self._first_name = first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @last_name.setter
    def last_name(self, last_name: str) -> None:
        self._last_name = last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def admission_number(self) -> str:
        return self._admission_number

    @admission_number.setter
    def admission_number(self, admission_number: str) -> None:
        self._admission_number = Student.validate_admission_number_input(
            admission_number
        )

    @property
    def class_id(self) -> str | None:
        return self._class_id

    @class_id.setter
    def class_id(self, class_id: str | None) -> None:
        self._class_id = class_id

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "firstName": self._first_name,
            "lastName": self._last_name,
            "admissionNumber": self._admission_number,
            "classId": self._class_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=data["id"],
            first_name=data["firstName"],
            last_name=data["lastName"],
            admission_number=data["admissionNumber"],
            class_id=data.get("classId"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._first_name}, {self._last_name}, {self._admission_number})"

    def __str__(self) -> str:
        return f"STUDENT: name: {self.full_name}, admission no: {self._admission_number}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_admission_number_input(admission_number: str) -> str:
        """
        Validates and normalizes a Student admission number.

        Strips surrounding whitespace and converts to uppercase.

        Raises:
            TypeError: If the input is not a string.
            ValueError: If the input is blank.
        """
        if not isinstance(admission_number, str):
            raise TypeError("Invalid input. Admission number must be a string.")

        admission_number = admission_number.strip().upper()

        if not admission_number:
            raise ValueError("Invalid input. Admission number cannot be blank.")

        return admission_number
