"""Identifier generation for activity records and diagnostic sessions."""

import time
from uuid import uuid4


def generate_id() -> str:
    """Return an opaque identifier for an activity record."""
    return uuid4().hex[:12]


def generate_session_id() -> str:
    """
    Return a correlation token for one pass through a diagnostic.

    Uniqueness is not enforced anywhere; the token only ties answers
    from the same sitting together.
    """
    return f"session_{int(time.time() * 1000)}_{uuid4().hex[:9]}"
