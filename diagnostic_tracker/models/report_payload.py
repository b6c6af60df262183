"""
ReportPayload model - Data handed to the report rendering / email service.

This is the boundary type for the external collaborator that renders the
PDF and sends the email. It is validated strictly: malformed input is
rejected instead of being patched up with placeholder answers.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .diagnostic_progress import DiagnosticAnswer, DiagnosticInsight


def check_email(value: str) -> str:
    """
    Minimal shape check for an email address.

    Args:
        value: Address to check

    Returns:
        The address with surrounding whitespace removed

    Raises:
        ValueError: If there is no local part or no dotted domain
    """
    value = value.strip()
    local, _, domain = value.partition('@')
    if not local or '.' not in domain.strip('.'):
        raise ValueError(f"Invalid email address: {value!r}")
    return value


class ReportPayload(BaseModel):
    """
    Validated report data for one completed diagnostic.

    Attributes:
        tool_name: Full diagnostic name
        display_name: Name without the trailing " Diagnostic"
        requester_name: Who asked for the report
        requester_email: Where to send it
        score: 0-100 diagnostic score
        score_message: One-line summary for the score band
        answers: Every answered question, in order (at least one)
        insights: Insights attached to the diagnostic, if any
        requested_at: Epoch milliseconds of the request
    """
    tool_name: str = Field(min_length=1, alias="toolName")
    display_name: str = Field(alias="displayName")
    requester_name: str = Field(min_length=1, alias="requesterName")
    requester_email: str = Field(alias="requesterEmail")
    score: int = Field(ge=0, le=100)
    score_message: str = Field(alias="scoreMessage")
    answers: List[DiagnosticAnswer] = Field(min_length=1)
    insights: Optional[List[DiagnosticInsight]] = None
    requested_at: int = Field(ge=0, alias="requestedAt")

    model_config = {"populate_by_name": True}

    @field_validator('requester_email')
    @classmethod
    def _check_email(cls, value: str) -> str:
        return check_email(value)
