"""
Diagnostic Progress Tracker API

FastAPI wrapper exposing the dashboard document store.
"""

from functools import lru_cache
from typing import Any, Dict, List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, ValidationError, field_validator

from diagnostic_tracker import __version__
from diagnostic_tracker.errors import (
    DiagnosticAlreadyCompletedError,
    ReportDataError,
    UnknownDiagnosticError,
)
from diagnostic_tracker.metrics.dashboard_metrics import DashboardMetrics
from diagnostic_tracker.models.diagnostic_progress import DiagnosticInsight, DiagnosticProgress
from diagnostic_tracker.models.report_payload import ReportPayload, check_email
from diagnostic_tracker.storage.document_store import DocumentStore
from diagnostic_tracker.storage.factory import create_backing_store
from diagnostic_tracker.tracking.diagnostic_flow import DiagnosticFlow
from diagnostic_tracker.tracking.question_bank import QuestionBank
from diagnostic_tracker.tracking.report_builder import build_report_payload
from diagnostic_tracker.utils.constants import DEFAULT_RECENT_ACTIVITY_LIMIT

app = FastAPI(
    title="Diagnostic Progress Tracker",
    description="Track diagnostic progress, activity and report requests for the dashboard",
    version=__version__,
)


@lru_cache(maxsize=1)
def get_store() -> DocumentStore:
    """One document store per process, built from DASHBOARD_STORE_URL."""
    return DocumentStore(create_backing_store())


@lru_cache(maxsize=1)
def get_question_bank() -> Optional[QuestionBank]:
    """Question bank from QUESTION_BANK_PATH, if configured."""
    return QuestionBank.from_env()


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode='json', by_alias=True, exclude_none=True)


# =============================================================================
# Request bodies
# =============================================================================

class PhaseCompletionBody(BaseModel):
    phase: str = Field(min_length=1)
    score: int = Field(ge=0, le=100)
    answers: List[bool]


class ProfileBody(BaseModel):
    name: str
    email: str


class ReportRequestBody(BaseModel):
    tool_name: str = Field(min_length=1, alias="toolName")
    name: str = Field(min_length=1)
    email: str
    score: int = Field(ge=0, le=100)
    report_content: Optional[str] = Field(default=None, alias="reportContent")

    model_config = {"populate_by_name": True}

    @field_validator('email')
    @classmethod
    def _check_email(cls, value: str) -> str:
        return check_email(value)


class AnswerBody(BaseModel):
    answer: Literal["Yes", "No"]


# =============================================================================
# Health
# =============================================================================

@app.get("/")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "diagnostic-progress-tracker",
        "version": __version__,
    }


@app.get("/health")
async def health():
    """Alias for health check."""
    return await health_check()


# =============================================================================
# Dashboard
# =============================================================================

@app.get("/dashboard")
def get_dashboard(store: DocumentStore = Depends(get_store)):
    """Return the whole dashboard document."""
    return store.load().to_dict()


@app.delete("/dashboard")
def reset_dashboard(store: DocumentStore = Depends(get_store)):
    """Delete all stored progress."""
    store.clear_all()
    return {"status": "cleared"}


@app.get("/dashboard/metrics")
def get_metrics(store: DocumentStore = Depends(get_store)):
    """Headline dashboard metrics."""
    metrics = DashboardMetrics(store.load(), clock=store.clock)
    return metrics.summary().to_dict()


@app.get("/activities")
def get_activities(
    limit: int = Query(DEFAULT_RECENT_ACTIVITY_LIMIT, ge=1, le=50),
    store: DocumentStore = Depends(get_store),
):
    """Most recent activities, newest first."""
    return [_dump(a) for a in store.recent_activities(limit)]


@app.post("/phase")
def record_phase(body: PhaseCompletionBody, store: DocumentStore = Depends(get_store)):
    """Store a finished phase assessment."""
    doc = store.record_phase_completion(body.phase, body.score, body.answers)
    return _dump(doc.phase)


@app.put("/profile")
def update_profile(body: ProfileBody, store: DocumentStore = Depends(get_store)):
    """Update the user's contact details."""
    doc = store.update_user_profile(body.name, body.email)
    return _dump(doc.user_data)


# =============================================================================
# Diagnostics
# =============================================================================

@app.get("/diagnostics")
def list_diagnostics(store: DocumentStore = Depends(get_store)):
    return [_dump(d) for d in store.list_diagnostic_progress()]


@app.get("/diagnostics/{tool_name}")
def get_diagnostic(tool_name: str, store: DocumentStore = Depends(get_store)):
    progress = store.get_diagnostic_progress(tool_name)
    if progress is None:
        raise HTTPException(status_code=404, detail=f"No progress for {tool_name}")
    return _dump(progress)


@app.put("/diagnostics/{tool_name}")
def upsert_diagnostic(
    tool_name: str,
    progress: DiagnosticProgress,
    store: DocumentStore = Depends(get_store),
):
    """Replace (or create) the progress record for a diagnostic."""
    if progress.tool_name != tool_name:
        raise HTTPException(
            status_code=400,
            detail=f"Body toolName '{progress.tool_name}' does not match path '{tool_name}'",
        )
    store.upsert_diagnostic_progress(progress)
    return _dump(progress)


@app.delete("/diagnostics/{tool_name}")
def clear_diagnostic(tool_name: str, store: DocumentStore = Depends(get_store)):
    """Forget a diagnostic so it can be retaken."""
    store.clear_diagnostic(tool_name)
    return {"status": "cleared", "toolName": tool_name}


@app.post("/diagnostics/{tool_name}/answers")
def answer_question(
    tool_name: str,
    body: AnswerBody,
    store: DocumentStore = Depends(get_store),
    question_bank: Optional[QuestionBank] = Depends(get_question_bank),
):
    """Answer the next question of a diagnostic."""
    if question_bank is None:
        raise HTTPException(status_code=503, detail="Question bank is not configured")

    flow = DiagnosticFlow(store, question_bank)
    try:
        progress = flow.answer(tool_name, body.answer)
    except UnknownDiagnosticError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DiagnosticAlreadyCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _dump(progress)


@app.get("/diagnostics/{tool_name}/resume")
def resume_diagnostic(tool_name: str, store: DocumentStore = Depends(get_store)):
    """Saved position of an unfinished diagnostic."""
    resume = DashboardMetrics(store.load()).resume_data(tool_name)
    if resume is None:
        raise HTTPException(status_code=404, detail=f"Nothing to resume for {tool_name}")
    return _dump(resume)


@app.put("/diagnostics/{tool_name}/insights")
def save_insights(
    tool_name: str,
    insights: List[DiagnosticInsight],
    store: DocumentStore = Depends(get_store),
):
    """Attach insights to a diagnostic."""
    if store.get_diagnostic_progress(tool_name) is None:
        raise HTTPException(status_code=404, detail=f"No progress for {tool_name}")
    store.save_diagnostic_insights(tool_name, insights)
    return [_dump(i) for i in insights]


# =============================================================================
# Reports
# =============================================================================

@app.post("/reports", status_code=201)
def request_report(body: ReportRequestBody, store: DocumentStore = Depends(get_store)):
    """Record a report request with the requester's contact details."""
    doc = store.add_report_request(
        body.tool_name, body.name, body.email, body.score, body.report_content
    )
    return _dump(doc.reports[-1])


@app.post("/reports/{tool_name}/download")
def download_report(tool_name: str, store: DocumentStore = Depends(get_store)):
    """Mark the first report for a diagnostic as downloaded."""
    doc = store.mark_report_downloaded(tool_name)
    report = doc.find_report(tool_name)
    if report is None:
        raise HTTPException(status_code=404, detail=f"No report requested for {tool_name}")
    return _dump(report)


@app.get("/reports/{tool_name}/payload")
def get_report_payload(tool_name: str, store: DocumentStore = Depends(get_store)):
    """Validated data for rendering and emailing a report."""
    try:
        payload: ReportPayload = build_report_payload(store.load(), tool_name)
    except ReportDataError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _dump(payload)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
