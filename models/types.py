# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .assessment import Assessment
from .result import Result
from .student import Student

RecordType = TypeVar("RecordType", Assessment, Result, Student)
