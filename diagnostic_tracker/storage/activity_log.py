"""
Activity log embedded in the dashboard document.

Keeps the most recent user actions newest-first, capped at a fixed size,
and drops repeats of the same action on the same diagnostic that arrive
within a short window.
"""

import logging
from typing import Callable, List, Optional, Union

from diagnostic_tracker.models.activity_record import ActivityRecord, ActivityType
from diagnostic_tracker.utils.constants import (
    ACTIVITY_DEDUP_WINDOW_MS,
    ACTIVITY_DESCRIPTIONS,
    ACTIVITY_LOG_CAPACITY,
)
from diagnostic_tracker.utils.ids import generate_id
from diagnostic_tracker.utils.time_format import now_ms

logger = logging.getLogger(__name__)


class ActivityLog:
    """
    Capped, duplicate-suppressing view over a list of ActivityRecords.

    The list is mutated in place, so wrapping a document's activities list
    and then saving the document persists the change.

    Example usage:
        log = ActivityLog(doc.activities)
        log.append(ActivityType.DIAGNOSTIC_STARTED, tool_name="Marketing ...")
    """

    def __init__(
        self,
        records: List[ActivityRecord],
        clock: Callable[[], int] = now_ms,
        capacity: int = ACTIVITY_LOG_CAPACITY,
        dedup_window_ms: int = ACTIVITY_DEDUP_WINDOW_MS,
        id_factory: Callable[[], str] = generate_id,
    ) -> None:
        """
        Initialize log over an existing record list.

        Args:
            records: Newest-first list to mutate
            clock: Returns current time in epoch milliseconds
            capacity: Maximum number of records kept
            dedup_window_ms: Window within which repeats are dropped
            id_factory: Returns a new record id
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got: {capacity}")
        self.records = records
        self.clock = clock
        self.capacity = capacity
        self.dedup_window_ms = dedup_window_ms
        self.id_factory = id_factory

    def append(
        self,
        activity_type: Union[ActivityType, str],
        tool_name: Optional[str] = None,
        phase: Optional[str] = None,
        score: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Optional[ActivityRecord]:
        """
        Record a new activity unless it duplicates a very recent one.

        Args:
            activity_type: Kind of action
            tool_name: Diagnostic the action concerns, if any
            phase: Phase name for phase assessments
            score: Score to show alongside the action
            description: Display text. Generated from the type if omitted.

        Returns:
            The stored record, or None if it was suppressed as a duplicate
        """
        activity_type = ActivityType(activity_type)
        now = self.clock()

        latest = self._latest_matching(activity_type, tool_name)
        if latest is not None and now - latest.timestamp < self.dedup_window_ms:
            logger.debug(
                "Dropping duplicate %s activity for %s (%d ms after previous)",
                activity_type.value, tool_name, now - latest.timestamp,
            )
            return None

        record = ActivityRecord(
            id=self.id_factory(),
            type=activity_type,
            tool_name=tool_name,
            phase=phase,
            score=score,
            timestamp=now,
            description=description or self._describe(activity_type, tool_name, phase, score),
        )
        self.records.insert(0, record)
        del self.records[self.capacity:]
        return record

    def recent(self, limit: int) -> List[ActivityRecord]:
        """Return up to limit records, newest first."""
        if limit <= 0:
            return []
        return list(self.records[:limit])

    def _latest_matching(
        self, activity_type: ActivityType, tool_name: Optional[str]
    ) -> Optional[ActivityRecord]:
        matches = [
            r for r in self.records
            if r.type == activity_type and r.tool_name == tool_name
        ]
        if not matches:
            return None
        return max(matches, key=lambda r: r.timestamp)

    @staticmethod
    def _describe(
        activity_type: ActivityType,
        tool_name: Optional[str],
        phase: Optional[str],
        score: Optional[int],
    ) -> str:
        template = ACTIVITY_DESCRIPTIONS[activity_type.value]
        return template.format(
            tool_name=tool_name or "diagnostic",
            phase=phase or "unknown",
            score=score if score is not None else 0,
        )
