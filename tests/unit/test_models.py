"""
Unit tests for data models.

Tests cover:
- DiagnosticAnswer: strict Yes/No answers
- DiagnosticProgress: progress invariants, score formula
- PhaseAssessment: completion invariant
- DashboardDocument: defaults, serialization, unique diagnostics
- ReportPayload: boundary validation
"""

import pytest
from pydantic import ValidationError

from diagnostic_tracker.models import (
    ActivityRecord,
    ActivityType,
    DashboardDocument,
    DiagnosticAnswer,
    DiagnosticProgress,
    PhaseAssessment,
    ReportPayload,
    calculate_score,
)


def make_answers(values):
    """Build DiagnosticAnswers from a list of "Yes"/"No" strings."""
    return [
        DiagnosticAnswer(question_id=f"q{i + 1}", question=f"Question {i + 1}", answer=v)
        for i, v in enumerate(values)
    ]


# =============================================================================
# DiagnosticAnswer Tests
# =============================================================================

class TestDiagnosticAnswer:
    """Tests for DiagnosticAnswer model."""

    def test_accepts_yes_and_no(self):
        """Test that both valid answers are accepted."""
        assert DiagnosticAnswer(question_id="q1", question="Q?", answer="Yes").answer == "Yes"
        assert DiagnosticAnswer(question_id="q1", question="Q?", answer="No").answer == "No"

    def test_rejects_other_answers(self):
        """Test that anything but Yes/No raises ValidationError."""
        with pytest.raises(ValidationError):
            DiagnosticAnswer(question_id="q1", question="Q?", answer="Maybe")

    def test_parses_camel_case_keys(self):
        """Test that persisted camelCase keys are accepted."""
        answer = DiagnosticAnswer.model_validate(
            {"questionId": "q7", "question": "Do you track ROI?", "answer": "No"}
        )
        assert answer.question_id == "q7"


# =============================================================================
# Score Tests
# =============================================================================

class TestCalculateScore:
    """Tests for the diagnostic score formula."""

    def test_nine_of_ten(self):
        """Test 9 Yes out of 10 scores 90."""
        answers = make_answers(["Yes"] * 9 + ["No"])
        assert calculate_score(answers, 10) == 90

    def test_half_rounds_up(self):
        """Test that 12.5 rounds to 13, not banker's 12."""
        answers = make_answers(["Yes"] + ["No"] * 7)
        assert calculate_score(answers, 8) == 13

    def test_all_no_scores_zero(self):
        """Test all No answers score 0."""
        assert calculate_score(make_answers(["No"] * 5), 5) == 0

    def test_reject_zero_total(self):
        """Test that total_questions of 0 raises ValueError."""
        with pytest.raises(ValueError, match="must be positive"):
            calculate_score([], 0)


# =============================================================================
# DiagnosticProgress Tests
# =============================================================================

class TestDiagnosticProgress:
    """Tests for DiagnosticProgress invariants."""

    def test_valid_in_progress(self):
        """Test an in-progress record with matching answer count."""
        progress = DiagnosticProgress(
            tool_name="Marketing Effectiveness Diagnostic",
            current_question=2,
            total_questions=10,
            answers=make_answers(["Yes", "No"]),
            started_at=1000,
            session_id="session_1",
        )
        assert progress.completed is False
        assert progress.completed_at is None

    def test_valid_completed(self):
        """Test a completed record with a correct score."""
        progress = DiagnosticProgress(
            tool_name="Cash Flow & Financial Clarity Diagnostic",
            completed=True,
            score=67,
            current_question=3,
            total_questions=3,
            answers=make_answers(["Yes", "Yes", "No"]),
            started_at=1000,
            completed_at=2000,
            session_id="session_1",
        )
        assert progress.score == 67

    def test_reject_wrong_score(self):
        """Test that a completed score not matching the answers is rejected."""
        with pytest.raises(ValidationError, match="does not match"):
            DiagnosticProgress(
                tool_name="X",
                completed=True,
                score=100,
                current_question=2,
                total_questions=2,
                answers=make_answers(["Yes", "No"]),
                started_at=1000,
                session_id="s",
            )

    def test_reject_answer_count_mismatch(self):
        """Test that answers must match current_question while in progress."""
        with pytest.raises(ValidationError, match="expected 3 answers"):
            DiagnosticProgress(
                tool_name="X",
                current_question=3,
                total_questions=10,
                answers=make_answers(["Yes"]),
                started_at=1000,
                session_id="s",
            )

    def test_reject_incomplete_answers_when_completed(self):
        """Test that a completed record needs every answer."""
        with pytest.raises(ValidationError):
            DiagnosticProgress(
                tool_name="X",
                completed=True,
                score=100,
                current_question=3,
                total_questions=3,
                answers=make_answers(["Yes", "Yes"]),
                started_at=1000,
                session_id="s",
            )

    def test_reject_current_question_past_total(self):
        """Test that current_question cannot exceed total_questions."""
        with pytest.raises(ValidationError, match="exceeds"):
            DiagnosticProgress(
                tool_name="X",
                current_question=4,
                total_questions=3,
                answers=make_answers(["Yes"] * 4),
                started_at=1000,
                session_id="s",
            )

    def test_reject_zero_total_questions(self):
        """Test that total_questions must be positive."""
        with pytest.raises(ValidationError):
            DiagnosticProgress(
                tool_name="X",
                total_questions=0,
                started_at=1000,
                session_id="s",
            )


# =============================================================================
# PhaseAssessment Tests
# =============================================================================

class TestPhaseAssessment:
    """Tests for PhaseAssessment model."""

    def test_default_is_incomplete(self):
        """Test default phase assessment state."""
        phase = PhaseAssessment()
        assert phase.completed is False
        assert phase.phase == ""
        assert phase.answers == []

    def test_reject_completed_without_phase(self):
        """Test completed assessments must name a phase."""
        with pytest.raises(ValidationError, match="must name a phase"):
            PhaseAssessment(completed=True, phase="", score=50, completed_at=1000)

    def test_reject_completed_without_timestamp(self):
        """Test completed assessments need completed_at > 0."""
        with pytest.raises(ValidationError, match="completedAt"):
            PhaseAssessment(completed=True, phase="Growth", score=50, completed_at=0)


# =============================================================================
# DashboardDocument Tests
# =============================================================================

class TestDashboardDocument:
    """Tests for DashboardDocument model."""

    def test_default_document(self):
        """Test the first-time-user document."""
        doc = DashboardDocument.default(now=12345)
        assert doc.user_data.last_active == 12345
        assert doc.phase.completed is False
        assert doc.diagnostics == []
        assert doc.activities == []
        assert doc.reports == []
        assert doc.insights == []

    def test_to_dict_uses_persisted_layout(self):
        """Test serialization keeps the camelCase layout."""
        doc = DashboardDocument.default(now=1)
        doc.diagnostics.append(DiagnosticProgress(
            tool_name="X",
            current_question=1,
            total_questions=2,
            answers=make_answers(["Yes"]),
            started_at=5,
            session_id="s",
        ))
        data = doc.to_dict()

        assert set(data) == {"userData", "phase", "diagnostics", "activities", "reports", "insights"}
        assert data["userData"] == {"name": "", "email": "", "lastActive": 1}
        assert data["phase"]["completedAt"] == 0
        diagnostic = data["diagnostics"][0]
        assert diagnostic["toolName"] == "X"
        assert diagnostic["currentQuestion"] == 1
        assert "completedAt" not in diagnostic
        assert diagnostic["answers"][0] == {"questionId": "q1", "question": "Question 1", "answer": "Yes"}

    def test_round_trip(self):
        """Test that to_dict output validates back to an equal document."""
        doc = DashboardDocument.default(now=1)
        assert DashboardDocument.model_validate(doc.to_dict()) == doc

    def test_reject_duplicate_diagnostics(self):
        """Test that two records for one diagnostic are rejected."""
        record = {
            "toolName": "X", "completed": False, "score": 0, "currentQuestion": 0,
            "totalQuestions": 3, "answers": [], "startedAt": 1, "sessionId": "s",
        }
        with pytest.raises(ValidationError, match="Duplicate"):
            DashboardDocument.model_validate({"diagnostics": [record, dict(record)]})

    def test_find_diagnostic(self):
        """Test lookup by tool name."""
        doc = DashboardDocument.model_validate({"diagnostics": [{
            "toolName": "X", "currentQuestion": 0, "totalQuestions": 3,
            "answers": [], "startedAt": 1, "sessionId": "s",
        }]})
        assert doc.find_diagnostic("X").total_questions == 3
        assert doc.find_diagnostic("Y") is None

    def test_find_report_returns_first_match(self):
        """Test report lookup returns the earliest request for a tool name."""
        def request(tool_name, score):
            return {
                "toolName": tool_name, "name": "Ada", "email": "ada@example.com",
                "score": score, "requestedAt": score, "downloaded": False,
            }

        doc = DashboardDocument.model_validate({"reports": [
            request("Y", 10), request("X", 20), request("X", 30),
        ]})

        assert doc.find_report("X").score == 20
        assert doc.find_report("Z") is None


# =============================================================================
# ActivityRecord Tests
# =============================================================================

class TestActivityRecord:
    """Tests for ActivityRecord model."""

    def test_type_parsed_from_string(self):
        """Test that persisted type strings become ActivityType members."""
        record = ActivityRecord.model_validate({
            "id": "a1", "type": "report_requested", "toolName": "X",
            "timestamp": 10, "description": "Requested report for X",
        })
        assert record.type is ActivityType.REPORT_REQUESTED

    def test_reject_unknown_type(self):
        """Test that unknown activity types are rejected."""
        with pytest.raises(ValidationError):
            ActivityRecord(id="a1", type="report_sent", timestamp=10, description="x")


# =============================================================================
# ReportPayload Tests
# =============================================================================

class TestReportPayload:
    """Tests for ReportPayload boundary validation."""

    def _payload(self, **overrides):
        data = dict(
            tool_name="Marketing Effectiveness Diagnostic",
            display_name="Marketing Effectiveness",
            requester_name="Ada",
            requester_email="ada@example.com",
            score=90,
            score_message="Strong",
            answers=make_answers(["Yes"]),
            requested_at=100,
        )
        data.update(overrides)
        return ReportPayload(**data)

    def test_valid_payload(self):
        """Test a well-formed payload."""
        payload = self._payload(requester_email="  ada@example.com ")
        assert payload.requester_email == "ada@example.com"

    def test_reject_bad_email(self):
        """Test that malformed email addresses are rejected."""
        with pytest.raises(ValidationError, match="Invalid email"):
            self._payload(requester_email="not-an-email")

    def test_reject_missing_answers(self):
        """Test that a payload without answers is rejected, not padded."""
        with pytest.raises(ValidationError):
            self._payload(answers=[])

    def test_reject_malformed_answer_shape(self):
        """Test that answers of the wrong shape are rejected."""
        with pytest.raises(ValidationError):
            self._payload(answers=[{"question": "Q?", "answer": True}])
