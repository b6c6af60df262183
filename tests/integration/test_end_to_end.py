"""
End-to-end integration tests.

Tests a user's full journey through the dashboard against a file-backed
store: diagnostic answers, completion, report request and download,
reloads from disk, and retake.
"""

import json

import pytest

from diagnostic_tracker.metrics import DashboardMetrics
from diagnostic_tracker.models import ActivityType
from diagnostic_tracker.storage import DocumentStore, FileKeyValueStore
from diagnostic_tracker.tracking import DiagnosticFlow, QuestionBank, build_report_payload
from diagnostic_tracker.utils.constants import DASHBOARD_STORAGE_KEY, DIAGNOSTIC_MARKETING


class TestEndToEnd:
    """End-to-end tests for the complete dashboard flow."""

    @pytest.fixture
    def bank(self):
        return QuestionBank({
            DIAGNOSTIC_MARKETING: [
                {"id": f"m{i + 1}", "text": f"Marketing question {i + 1}?"}
                for i in range(10)
            ]
        })

    def open_store(self, tmp_path, clock):
        """A fresh store instance over the same directory, like a new session."""
        return DocumentStore(FileKeyValueStore(tmp_path), clock=clock)

    def test_complete_marketing_diagnostic(self, tmp_path, clock, bank):
        """Test 9 Yes + 1 No completes with a score of 90 and one completion activity."""
        store = self.open_store(tmp_path, clock)
        flow = DiagnosticFlow(store, bank)

        for value in ["Yes"] * 9 + ["No"]:
            flow.answer(DIAGNOSTIC_MARKETING, value)
            clock.advance(2000)

        doc = self.open_store(tmp_path, clock).load()
        progress = doc.find_diagnostic(DIAGNOSTIC_MARKETING)
        assert progress.completed is True
        assert progress.score == 90
        assert len(progress.answers) == 10

        completed = [a for a in doc.activities if a.type is ActivityType.DIAGNOSTIC_COMPLETED]
        assert len(completed) == 1
        assert completed[0].score == 90
        assert completed[0].description == (
            "Completed Marketing Effectiveness Diagnostic with a score of 90%"
        )

        metrics = DashboardMetrics(doc)
        assert metrics.completed_count() == 1
        assert metrics.average_score() == 90

    def test_resume_in_new_session(self, tmp_path, clock, bank):
        """Test progress saved in one session is resumed in the next."""
        flow = DiagnosticFlow(self.open_store(tmp_path, clock), bank)
        for value in ["Yes", "No", "Yes"]:
            flow.answer(DIAGNOSTIC_MARKETING, value)
            clock.advance(1000)

        next_session = DiagnosticFlow(self.open_store(tmp_path, clock), bank)
        resume = next_session.start(DIAGNOSTIC_MARKETING)
        assert resume.current_question == 3

        progress = next_session.answer(DIAGNOSTIC_MARKETING, "No")
        assert progress.current_question == 4
        assert progress.session_id == resume.session_id
        assert progress.answers[3].question_id == "m4"

    def test_report_request_and_download(self, tmp_path, clock, bank):
        """Test the report lifecycle and the requester's profile."""
        store = self.open_store(tmp_path, clock)
        flow = DiagnosticFlow(store, bank)
        for value in ["Yes"] * 9 + ["No"]:
            flow.answer(DIAGNOSTIC_MARKETING, value)
        clock.advance(60_000)

        store.add_report_request(DIAGNOSTIC_MARKETING, "Ada Lovelace", "ada@example.com", 90)
        clock.advance(60_000)
        store.mark_report_downloaded(DIAGNOSTIC_MARKETING)

        reloaded = self.open_store(tmp_path, clock)
        doc = reloaded.load()
        assert doc.reports[0].downloaded is True
        assert doc.user_data.name == "Ada Lovelace"
        assert [a.type for a in doc.activities[:2]] == [
            ActivityType.REPORT_DOWNLOADED,
            ActivityType.REPORT_REQUESTED,
        ]

        payload = build_report_payload(doc, DIAGNOSTIC_MARKETING)
        assert payload.display_name == "Marketing Effectiveness"
        assert payload.score == 90

    def test_retake(self, tmp_path, clock, bank):
        """Test a retake removes the record but keeps the activity history."""
        store = self.open_store(tmp_path, clock)
        flow = DiagnosticFlow(store, bank)
        for value in ["No"] * 10:
            flow.answer(DIAGNOSTIC_MARKETING, value)

        flow.retake(DIAGNOSTIC_MARKETING)

        doc = self.open_store(tmp_path, clock).load()
        assert doc.diagnostics == []
        assert any(a.type is ActivityType.DIAGNOSTIC_COMPLETED for a in doc.activities)

    def test_document_layout_on_disk(self, tmp_path, clock, bank):
        """Test the stored JSON keeps the established camelCase layout."""
        flow = DiagnosticFlow(self.open_store(tmp_path, clock), bank)
        flow.answer(DIAGNOSTIC_MARKETING, "Yes")

        raw = json.loads((tmp_path / f"{DASHBOARD_STORAGE_KEY}.json").read_text(encoding='utf-8'))

        assert set(raw) == {"userData", "phase", "diagnostics", "activities", "reports", "insights"}
        record = raw["diagnostics"][0]
        assert record["toolName"] == DIAGNOSTIC_MARKETING
        assert record["currentQuestion"] == 1
        assert record["answers"][0] == {
            "questionId": "m1",
            "question": "Marketing question 1?",
            "answer": "Yes",
        }

    def test_corrupt_file_recovers(self, tmp_path, clock):
        """Test a corrupted file yields a fresh dashboard instead of an error."""
        (tmp_path / f"{DASHBOARD_STORAGE_KEY}.json").write_text("{truncated", encoding='utf-8')

        doc = self.open_store(tmp_path, clock).load()

        assert doc.diagnostics == []
        assert doc.user_data.last_active == clock.now

    def test_invalid_utf8_file_recovers(self, tmp_path, clock):
        """Test a file with undecodable bytes is replaced by a fresh dashboard."""
        path = tmp_path / f"{DASHBOARD_STORAGE_KEY}.json"
        path.write_bytes(b'{"userData": \xff\xfe}')

        doc = self.open_store(tmp_path, clock).load()

        assert doc.diagnostics == []
        assert json.loads(path.read_text(encoding='utf-8'))["userData"]["lastActive"] == clock.now
