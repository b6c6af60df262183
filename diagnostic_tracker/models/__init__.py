"""Data models for the Diagnostic Progress Tracker."""

from .user_profile import UserProfile
from .phase_assessment import PhaseAssessment
from .diagnostic_progress import (
    DiagnosticAnswer,
    DiagnosticInsight,
    DiagnosticProgress,
    ResumeData,
    calculate_score,
)
from .report_request import ReportRequest
from .activity_record import ActivityRecord, ActivityType
from .dashboard_document import DashboardDocument
from .question import Question
from .report_payload import ReportPayload

__all__ = [
    'UserProfile',
    'PhaseAssessment',
    'DiagnosticAnswer',
    'DiagnosticInsight',
    'DiagnosticProgress',
    'ResumeData',
    'calculate_score',
    'ReportRequest',
    'ActivityRecord',
    'ActivityType',
    'DashboardDocument',
    'Question',
    'ReportPayload',
]
