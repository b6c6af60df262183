"""Utility helpers for the Diagnostic Progress Tracker."""

from .time_format import now_ms, format_timestamp, format_last_active
from .rounding import round_half_up
from .ids import generate_id, generate_session_id

__all__ = [
    'now_ms',
    'format_timestamp',
    'format_last_active',
    'round_half_up',
    'generate_id',
    'generate_session_id',
]
