"""
Report payload builder.

Collects what the report rendering / email service needs for one
diagnostic: the latest report request, the completed answers and any
insights. Nothing is guessed: a diagnostic without a completed record or
without a report request is an error, not a placeholder report.
"""

from diagnostic_tracker.errors import ReportDataError
from diagnostic_tracker.models.dashboard_document import DashboardDocument
from diagnostic_tracker.models.report_payload import ReportPayload
from diagnostic_tracker.utils.constants import DIAGNOSTIC_NAME_SUFFIX, SCORE_MESSAGES


def score_message(score: int) -> str:
    """
    One-line summary for a diagnostic score.

    Args:
        score: 0-100 score

    Returns:
        Message for the highest band the score reaches
    """
    for minimum, message in SCORE_MESSAGES:
        if score >= minimum:
            return message
    return SCORE_MESSAGES[-1][1]


def display_name(tool_name: str) -> str:
    """Diagnostic name without its trailing " Diagnostic"."""
    if tool_name.endswith(DIAGNOSTIC_NAME_SUFFIX):
        return tool_name[:-len(DIAGNOSTIC_NAME_SUFFIX)]
    return tool_name


def build_report_payload(doc: DashboardDocument, tool_name: str) -> ReportPayload:
    """
    Build the validated report payload for a diagnostic.

    Args:
        doc: Loaded dashboard document
        tool_name: Diagnostic to report on

    Returns:
        ReportPayload for the latest report request of tool_name

    Raises:
        ReportDataError: If the diagnostic is missing, unfinished, or has
                         no report request
        pydantic.ValidationError: If the stored requester details are invalid
    """
    progress = doc.find_diagnostic(tool_name)
    if progress is None or not progress.completed:
        raise ReportDataError(f"No completed diagnostic found for {tool_name}")

    request = next((r for r in reversed(doc.reports) if r.tool_name == tool_name), None)
    if request is None:
        raise ReportDataError(f"No report request found for {tool_name}")

    return ReportPayload(
        tool_name=tool_name,
        display_name=display_name(tool_name),
        requester_name=request.name,
        requester_email=request.email,
        score=progress.score,
        score_message=score_message(progress.score),
        answers=list(progress.answers),
        insights=progress.insights,
        requested_at=request.requested_at,
    )
