"""
DocumentStore - Owner of the single dashboard document.

Every read goes through load() and every change is a read-modify-write of
the whole document: load, mutate, save. There is no locking and no version
token, so two writers racing will lose updates at document granularity
(last save wins). The store assumes one writer at a time.
"""

import json
import logging
from typing import Callable, List, Optional, Sequence, Union

from pydantic import ValidationError

from diagnostic_tracker.models.activity_record import ActivityRecord, ActivityType
from diagnostic_tracker.models.dashboard_document import DashboardDocument
from diagnostic_tracker.models.diagnostic_progress import (
    DiagnosticInsight,
    DiagnosticProgress,
)
from diagnostic_tracker.models.phase_assessment import PhaseAssessment
from diagnostic_tracker.models.report_request import ReportRequest
from diagnostic_tracker.models.user_profile import UserProfile
from diagnostic_tracker.utils.constants import (
    DASHBOARD_STORAGE_KEY,
    DEFAULT_RECENT_ACTIVITY_LIMIT,
)
from diagnostic_tracker.utils.ids import generate_id
from diagnostic_tracker.utils.time_format import now_ms

from .activity_log import ActivityLog
from .backing_store import KeyValueStore

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Typed accessors and mutators over one persisted DashboardDocument.

    Construct one per session and pass it to every consumer.

    Example usage:
        store = DocumentStore(FileKeyValueStore("./data"))
        store.upsert_diagnostic_progress(progress)
        doc = store.load()
    """

    def __init__(
        self,
        backing_store: KeyValueStore,
        key: str = DASHBOARD_STORAGE_KEY,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        """
        Initialize store.

        Args:
            backing_store: Key/value store holding the serialized document
            key: Key the document lives under
            clock: Returns current time in epoch milliseconds
            id_factory: Returns new activity record ids
        """
        self.backing_store = backing_store
        self.key = key
        self.clock = clock
        self.id_factory = id_factory

    # =========================================================================
    # Load / save
    # =========================================================================

    def load(self) -> DashboardDocument:
        """
        Return the current document.

        Missing, undecodable or invalid content is treated as absent: a
        default document is built, persisted and returned. Content that is
        not valid UTF-8, or JSON nested too deeply to parse, counts as
        undecodable. Backing store I/O errors still propagate.

        Returns:
            The stored DashboardDocument
        """
        try:
            raw = self.backing_store.get(self.key)
            if raw:
                return DashboardDocument.model_validate(json.loads(raw))
        except (
            UnicodeDecodeError,
            RecursionError,
            json.JSONDecodeError,
            ValidationError,
        ) as e:
            logger.warning(
                "Discarding unreadable dashboard data under '%s': %s",
                self.key, type(e).__name__,
            )

        doc = DashboardDocument.default(now=self.clock())
        self.save(doc)
        return doc

    def save(self, doc: DashboardDocument) -> None:
        """
        Overwrite the stored document.

        The document is re-validated first so that an in-place edit which
        broke an invariant is rejected instead of persisted.

        Args:
            doc: Document to store

        Raises:
            pydantic.ValidationError: If the document is invalid
            Exception: Whatever the backing store raises on write failure
        """
        payload = doc.to_dict()
        DashboardDocument.model_validate(payload)
        self.backing_store.set(self.key, json.dumps(payload))

    def clear_all(self) -> None:
        """Delete the stored document. The next load() starts fresh."""
        self.backing_store.remove(self.key)
        logger.info("Cleared all dashboard data under '%s'", self.key)

    def _activity_log(self, doc: DashboardDocument) -> ActivityLog:
        return ActivityLog(doc.activities, clock=self.clock, id_factory=self.id_factory)

    # =========================================================================
    # Phase assessment
    # =========================================================================

    def record_phase_completion(
        self, phase: str, score: int, answers: Sequence[bool]
    ) -> DashboardDocument:
        """
        Store a finished phase assessment, replacing any earlier one.

        Args:
            phase: Business phase the user was placed in
            score: 0-100 assessment score
            answers: Yes/No answers in question order

        Returns:
            Updated document
        """
        doc = self.load()
        doc.phase = PhaseAssessment(
            completed=True,
            phase=phase,
            score=score,
            completed_at=self.clock(),
            answers=list(answers),
        )
        self._activity_log(doc).append(
            ActivityType.PHASE_COMPLETED, phase=phase, score=score
        )
        self.save(doc)
        logger.info("Saved phase completion: %s (score %d)", phase, score)
        return doc

    def get_phase(self) -> PhaseAssessment:
        return self.load().phase

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def upsert_diagnostic_progress(self, progress: DiagnosticProgress) -> DashboardDocument:
        """
        Replace the record with the same tool_name, or append it.

        This is a whole-record replace, not a merge: callers must pass the
        complete updated record.

        Args:
            progress: Complete progress record

        Returns:
            Updated document
        """
        doc = self.load()
        log = self._activity_log(doc)
        existing_index = next(
            (i for i, d in enumerate(doc.diagnostics) if d.tool_name == progress.tool_name),
            None,
        )

        if existing_index is None:
            previous = None
            doc.diagnostics.append(progress)
            log.append(ActivityType.DIAGNOSTIC_STARTED, tool_name=progress.tool_name)
            logger.info("Added new diagnostic: %s", progress.tool_name)
        else:
            previous = doc.diagnostics[existing_index]
            doc.diagnostics[existing_index] = progress
            logger.info("Updated existing diagnostic: %s", progress.tool_name)

        if progress.completed and not (previous is not None and previous.completed):
            log.append(
                ActivityType.DIAGNOSTIC_COMPLETED,
                tool_name=progress.tool_name,
                score=progress.score,
            )

        self.save(doc)
        return doc

    def get_diagnostic_progress(self, tool_name: str) -> Optional[DiagnosticProgress]:
        return self.load().find_diagnostic(tool_name)

    def list_diagnostic_progress(self) -> List[DiagnosticProgress]:
        return self.load().diagnostics

    def clear_diagnostic(self, tool_name: str) -> DashboardDocument:
        """
        Remove a diagnostic's record entirely so it can be retaken.

        Args:
            tool_name: Diagnostic to forget

        Returns:
            Updated document
        """
        doc = self.load()
        doc.diagnostics = [d for d in doc.diagnostics if d.tool_name != tool_name]
        self.save(doc)
        logger.info("Cleared diagnostic progress: %s", tool_name)
        return doc

    def save_diagnostic_insights(
        self, tool_name: str, insights: Sequence[DiagnosticInsight]
    ) -> DashboardDocument:
        """
        Attach insights to an existing diagnostic record.

        Args:
            tool_name: Diagnostic to update
            insights: Insights to store, replacing any earlier ones

        Returns:
            Document, unchanged if no record exists for tool_name
        """
        doc = self.load()
        diagnostic = doc.find_diagnostic(tool_name)
        if diagnostic is None:
            logger.warning("No diagnostic found for %s to save insights", tool_name)
            return doc

        diagnostic.insights = list(insights)
        self.save(doc)
        return doc

    def get_diagnostic_insights(self, tool_name: str) -> Optional[List[DiagnosticInsight]]:
        diagnostic = self.get_diagnostic_progress(tool_name)
        if diagnostic is None or not diagnostic.insights:
            return None
        return diagnostic.insights

    # =========================================================================
    # Reports
    # =========================================================================

    def add_report_request(
        self,
        tool_name: str,
        name: str,
        email: str,
        score: int,
        report_content: Optional[str] = None,
    ) -> DashboardDocument:
        """
        Record a report request and remember the requester's details.

        Args:
            tool_name: Diagnostic the report covers
            name: Requester name
            email: Requester email
            score: Diagnostic score at request time
            report_content: Rendered report text, if already generated

        Returns:
            Updated document
        """
        doc = self.load()
        now = self.clock()
        doc.reports.append(ReportRequest(
            tool_name=tool_name,
            name=name,
            email=email,
            score=score,
            requested_at=now,
            downloaded=False,
            report_content=report_content,
        ))
        doc.user_data = UserProfile(name=name, email=email, last_active=now)
        self._activity_log(doc).append(
            ActivityType.REPORT_REQUESTED, tool_name=tool_name, score=score
        )
        self.save(doc)
        logger.info("Saved report request for %s. Total reports: %d", tool_name, len(doc.reports))
        return doc

    def mark_report_downloaded(self, tool_name: str) -> DashboardDocument:
        """
        Flag the first report request for tool_name as downloaded.

        Later requests for the same diagnostic are never flagged. The flag
        flips once; later calls and calls for unknown diagnostics
        leave the document untouched.

        Args:
            tool_name: Diagnostic whose report was downloaded

        Returns:
            Document after the change, if any
        """
        doc = self.load()
        report = doc.find_report(tool_name)
        if report is None:
            logger.warning("No report request found for %s", tool_name)
            return doc
        if report.downloaded:
            return doc

        report.downloaded = True
        self._activity_log(doc).append(
            ActivityType.REPORT_DOWNLOADED, tool_name=tool_name, score=report.score
        )
        self.save(doc)
        return doc

    def get_reports(self) -> List[ReportRequest]:
        return self.load().reports

    # =========================================================================
    # User profile and activity
    # =========================================================================

    def update_user_profile(self, name: str, email: str) -> DashboardDocument:
        """Set the user's contact details and mark them active now."""
        doc = self.load()
        doc.user_data = UserProfile(name=name, email=email, last_active=self.clock())
        self.save(doc)
        return doc

    def get_user_profile(self) -> UserProfile:
        return self.load().user_data

    def log_activity(
        self,
        activity_type: Union[ActivityType, str],
        tool_name: Optional[str] = None,
        phase: Optional[str] = None,
        score: Optional[int] = None,
        description: Optional[str] = None,
    ) -> DashboardDocument:
        """
        Append an activity record, unless it duplicates a recent one.

        Returns:
            Document after the append (unchanged if suppressed)
        """
        doc = self.load()
        record = self._activity_log(doc).append(
            activity_type,
            tool_name=tool_name,
            phase=phase,
            score=score,
            description=description,
        )
        if record is not None:
            self.save(doc)
        return doc

    def recent_activities(self, limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT) -> List[ActivityRecord]:
        return self._activity_log(self.load()).recent(limit)
