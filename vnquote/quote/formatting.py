"""VND money helpers.

All amounts are whole Dong. Rounding is half-up, matching how premiums are
quoted on paper, not Python's round-half-to-even.
"""

import math
from typing import Union

Number = Union[int, float]


def round_vnd(value: Number) -> int:
    """Round to the nearest whole Dong, halves up."""
    return int(math.floor(float(value or 0) + 0.5))


def round_down_to_1000(value: Number) -> int:
    """Round down to a multiple of 1,000 VND (never negative)."""
    amount = float(value or 0)
    if amount <= 0:
        return 0
    return int(math.floor(amount / 1000)) * 1000


def round_to_1000(value: Number) -> int:
    """Round to the nearest multiple of 1,000 VND, halves up."""
    return round_vnd(float(value or 0) / 1000) * 1000


def format_vnd(value: Number) -> str:
    """Format an amount with '.' thousands separators, e.g. 1.234.000."""
    amount = round_vnd(value)
    sign = "-" if amount < 0 else ""
    return sign + f"{abs(amount):,}".replace(",", ".")
