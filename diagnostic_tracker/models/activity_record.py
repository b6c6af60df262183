"""
ActivityRecord model - One entry in the dashboard's recent activity feed.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ActivityType(str, Enum):
    """Kinds of user actions shown in the activity feed."""
    PHASE_COMPLETED = "phase_completed"
    DIAGNOSTIC_STARTED = "diagnostic_started"
    DIAGNOSTIC_COMPLETED = "diagnostic_completed"
    REPORT_REQUESTED = "report_requested"
    REPORT_DOWNLOADED = "report_downloaded"


class ActivityRecord(BaseModel):
    """
    A timestamped user action.
    Why: Lets the dashboard show what the user did recently, newest first.
    """
    id: str
    type: ActivityType
    tool_name: Optional[str] = Field(default=None, alias="toolName")
    phase: Optional[str] = None
    score: Optional[int] = Field(default=None, ge=0, le=100)
    timestamp: int = Field(ge=0)  # epoch ms
    description: str

    model_config = {"populate_by_name": True}
