"""
Rounding helper shared by scoring and metrics.

Python's round() uses banker's rounding (round(12.5) == 12). Scores are
shown to users as whole percentages, so halves must round up.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union


def round_half_up(value: Union[int, float, Decimal]) -> int:
    """
    Round a number to the nearest integer, halves away from zero.

    Args:
        value: Number to round

    Returns:
        Rounded integer

    Examples:
        >>> round_half_up(12.5)
        13
        >>> round_half_up(Decimal('89.4'))
        89
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
