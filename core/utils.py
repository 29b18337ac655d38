# core/utils.py

"""
Repository for program-wide utilities: record identifiers and date parsing.
"""

import datetime
import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def parse_iso_date(value: str | None) -> datetime.date | None:
    """
    Parses the calendar date out of an ISO-8601 string.

    Accepts plain dates ("2025-10-14") as well as timestamps ("2025-10-14T09:00:00Z"), in which case
    only the date part is kept.

    Returns:
        The parsed date, or None if `value` is None or blank.

    Raises:
        ValueError: If the date part is not a valid ISO date.
    """
    if value is None or not value.strip():
        return None

    return datetime.date.fromisoformat(value.strip()[:10])
