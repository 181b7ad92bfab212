"""Age calculation from DD/MM/YYYY dates of birth."""

import re
from datetime import date
from typing import Optional

_DOB_PATTERN = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")


def parse_dob(dob: Optional[str]) -> Optional[date]:
    """Parse a DD/MM/YYYY string.

    Returns:
        The date, or None when the string does not match the pattern or is not a
        real calendar date (e.g. 31/02/2000).
    """
    if not isinstance(dob, str):
        return None
    match = _DOB_PATTERN.match(dob.strip())
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def calculate_age(dob: Optional[str], reference_date: date) -> Optional[int]:
    """Age in completed years at the reference date.

    Args:
        dob: Date of birth as DD/MM/YYYY.
        reference_date: Date the age is measured against.

    Returns:
        Age clamped to >= 0, or None if the date of birth is invalid.
    """
    birth = parse_dob(dob)
    if birth is None:
        return None
    age = reference_date.year - birth.year
    if (reference_date.month, reference_date.day) < (birth.month, birth.day):
        age -= 1
    return max(0, age)


def days_from_birth(dob: Optional[str], reference_date: date) -> Optional[int]:
    """Whole days between birth and the reference date (None if invalid)."""
    birth = parse_dob(dob)
    if birth is None:
        return None
    return (reference_date - birth).days
