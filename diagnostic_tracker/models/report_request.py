"""
ReportRequest model - A user's request for an emailed diagnostic report.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ReportRequest(BaseModel):
    """
    Contact details submitted in exchange for a report.

    Append-only. downloaded flips to True on the first download and never
    reverts.
    """
    tool_name: str = Field(alias="toolName")
    name: str
    email: str
    score: int = Field(ge=0, le=100)
    requested_at: int = Field(ge=0, alias="requestedAt")
    downloaded: bool = False
    report_content: Optional[str] = Field(default=None, alias="reportContent")

    model_config = {"populate_by_name": True}
