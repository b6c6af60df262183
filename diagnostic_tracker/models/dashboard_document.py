"""
DashboardDocument model - The single aggregate holding all dashboard state.

Persisted as one JSON document under one storage key. Uses Pydantic v2 for
validation, so a document that fails any nested invariant is rejected as a
whole.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from .activity_record import ActivityRecord
from .diagnostic_progress import DiagnosticProgress
from .phase_assessment import PhaseAssessment
from .report_request import ReportRequest
from .user_profile import UserProfile


class DashboardDocument(BaseModel):
    """
    Root aggregate of the dashboard.
    Why: One document, one owner; every reader and writer goes through the
    document store.
    """
    user_data: UserProfile = Field(default_factory=UserProfile, alias="userData")
    phase: PhaseAssessment = Field(default_factory=PhaseAssessment)
    diagnostics: List[DiagnosticProgress] = Field(default_factory=list)
    activities: List[ActivityRecord] = Field(default_factory=list)
    reports: List[ReportRequest] = Field(default_factory=list)
    insights: List[Any] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @model_validator(mode='after')
    def _check_unique_diagnostics(self) -> 'DashboardDocument':
        names = [d.tool_name for d in self.diagnostics]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate diagnostic records: {duplicates}")
        return self

    @classmethod
    def default(cls, now: int) -> 'DashboardDocument':
        """
        Build the empty document used for first-time users.

        Args:
            now: Epoch milliseconds to stamp as last activity

        Returns:
            Document with empty collections and an incomplete phase
        """
        return cls(user_data=UserProfile(last_active=now))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, omitting unset optional fields."""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)

    def find_diagnostic(self, tool_name: str) -> Optional[DiagnosticProgress]:
        """Return the progress record for tool_name, or None."""
        for diagnostic in self.diagnostics:
            if diagnostic.tool_name == tool_name:
                return diagnostic
        return None

    def find_report(self, tool_name: str) -> Optional[ReportRequest]:
        """Return the first report request for tool_name, or None."""
        return next((r for r in self.reports if r.tool_name == tool_name), None)
