"""
Dashboard metrics calculated from the dashboard document.

Every figure is recomputed from the document on each call; nothing is
cached, so there is no invalidation to get wrong.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from diagnostic_tracker.models.dashboard_document import DashboardDocument
from diagnostic_tracker.models.diagnostic_progress import DiagnosticProgress, ResumeData
from diagnostic_tracker.utils.constants import DIAGNOSTIC_CATALOG
from diagnostic_tracker.utils.rounding import round_half_up
from diagnostic_tracker.utils.time_format import format_last_active, now_ms


@dataclass
class MetricsSummary:
    """
    Headline numbers for the dashboard overview.

    Attributes:
        total_diagnostics: Diagnostics offered by the product
        completed: Diagnostics the user has finished
        average_score: Rounded mean score of finished diagnostics (0 if none)
        last_activity: Epoch milliseconds of the user's last activity
        last_active_label: Human readable "time since" for last_activity
        phase_completed: Whether the phase assessment is done
        phase: Assessed business phase ("" if not done)
        phase_score: Phase assessment score
    """

    total_diagnostics: int
    completed: int
    average_score: int
    last_activity: int
    last_active_label: str
    phase_completed: bool
    phase: str
    phase_score: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize summary to dictionary for JSON output."""
        return asdict(self)


class DashboardMetrics:
    """
    Read-only projections over one loaded document.

    Example usage:
        metrics = DashboardMetrics(store.load(), clock=store.clock)
        metrics.average_score()
    """

    def __init__(
        self,
        document: DashboardDocument,
        catalog: Sequence[str] = DIAGNOSTIC_CATALOG,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """
        Initialize metrics.

        Args:
            document: Loaded dashboard document
            catalog: Diagnostics the product offers
            clock: Returns current time in epoch milliseconds
        """
        self.document = document
        self.catalog = list(catalog)
        self.clock = clock

    def total_diagnostics(self) -> int:
        """Number of diagnostics offered, regardless of how many were started."""
        return len(self.catalog)

    def completed_diagnostics(self) -> List[DiagnosticProgress]:
        return [d for d in self.document.diagnostics if d.completed]

    def completed_count(self) -> int:
        return len(self.completed_diagnostics())

    def average_score(self) -> int:
        """
        Mean score of completed diagnostics, rounded half up.

        Returns:
            Average score, or 0 when nothing has been completed
        """
        completed = self.completed_diagnostics()
        if not completed:
            return 0
        total = sum(d.score for d in completed)
        return round_half_up(Decimal(total) / Decimal(len(completed)))

    def last_activity_timestamp(self) -> int:
        return self.document.user_data.last_active

    def resume_data(self, tool_name: str) -> Optional[ResumeData]:
        """
        State needed to continue an unfinished diagnostic.

        Args:
            tool_name: Diagnostic to resume

        Returns:
            ResumeData, or None if the diagnostic was never started or is
            already completed
        """
        progress = self.document.find_diagnostic(tool_name)
        if progress is None or progress.completed:
            return None

        return ResumeData(
            tool_name=progress.tool_name,
            current_question=progress.current_question,
            total_questions=progress.total_questions,
            session_id=progress.session_id,
            answers=list(progress.answers),
        )

    def summary(self, now: Optional[int] = None) -> MetricsSummary:
        """
        Collect the overview metrics in one object.

        Args:
            now: Reference time for the last-active label, epoch ms.
                 Defaults to the metrics clock.

        Returns:
            MetricsSummary for the current document
        """
        phase = self.document.phase
        last_activity = self.last_activity_timestamp()
        return MetricsSummary(
            total_diagnostics=self.total_diagnostics(),
            completed=self.completed_count(),
            average_score=self.average_score(),
            last_activity=last_activity,
            last_active_label=format_last_active(
                last_activity, self.clock() if now is None else now
            ),
            phase_completed=phase.completed,
            phase=phase.phase,
            phase_score=phase.score,
        )
