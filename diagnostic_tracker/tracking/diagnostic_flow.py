"""
Diagnostic answer flow.

Walks a user through a diagnostic one answer at a time and persists
forward progress after every answer, so the dashboard can offer to resume
an unfinished diagnostic exactly where it was left.
"""

import logging
from typing import Callable, Literal

from diagnostic_tracker.errors import DiagnosticAlreadyCompletedError
from diagnostic_tracker.metrics.dashboard_metrics import DashboardMetrics
from diagnostic_tracker.models.diagnostic_progress import (
    DiagnosticAnswer,
    DiagnosticProgress,
    ResumeData,
    calculate_score,
)
from diagnostic_tracker.storage.document_store import DocumentStore
from diagnostic_tracker.utils.ids import generate_session_id

from .question_bank import QuestionBank

logger = logging.getLogger(__name__)


class DiagnosticFlow:
    """
    Records answers for diagnostics against a DocumentStore.

    State machine per diagnostic:
        absent -> in_progress -> ... -> completed -> (retake) -> absent

    A completed diagnostic accepts no more answers until it is retaken.
    """

    def __init__(
        self,
        store: DocumentStore,
        question_bank: QuestionBank,
        session_id_factory: Callable[[], str] = generate_session_id,
    ) -> None:
        self.store = store
        self.question_bank = question_bank
        self.session_id_factory = session_id_factory

    def start(self, tool_name: str) -> ResumeData:
        """
        Begin or resume a diagnostic.

        Nothing is persisted until the first answer.

        Args:
            tool_name: Diagnostic to start

        Returns:
            Saved position if the diagnostic is in progress, otherwise a
            fresh position at question 0 with a new session id

        Raises:
            UnknownDiagnosticError: If the question bank lacks tool_name
            DiagnosticAlreadyCompletedError: If the diagnostic is finished
        """
        questions = self.question_bank.questions_for(tool_name)
        doc = self.store.load()
        existing = doc.find_diagnostic(tool_name)
        if existing is not None and existing.completed:
            raise DiagnosticAlreadyCompletedError(
                f"{tool_name} is already completed; retake it to start over"
            )

        resume = DashboardMetrics(doc).resume_data(tool_name)
        if resume is not None:
            logger.info("Resuming %s from question %d", tool_name, resume.current_question)
            return resume

        return ResumeData(
            tool_name=tool_name,
            current_question=0,
            total_questions=len(questions),
            session_id=self.session_id_factory(),
            answers=[],
        )

    def answer(self, tool_name: str, answer: Literal["Yes", "No"]) -> DiagnosticProgress:
        """
        Answer the next unanswered question of a diagnostic.

        Args:
            tool_name: Diagnostic being answered
            answer: "Yes" or "No"

        Returns:
            The progress record as persisted

        Raises:
            UnknownDiagnosticError: If the question bank lacks tool_name
            DiagnosticAlreadyCompletedError: If the diagnostic is finished
            pydantic.ValidationError: If answer is not "Yes" or "No"
        """
        questions = self.question_bank.questions_for(tool_name)
        existing = self.store.get_diagnostic_progress(tool_name)
        if existing is not None and existing.completed:
            raise DiagnosticAlreadyCompletedError(
                f"{tool_name} is already completed; retake it to start over"
            )

        now = self.store.clock()
        if existing is None:
            answers = []
            session_id = self.session_id_factory()
            started_at = now
        else:
            answers = list(existing.answers)
            session_id = existing.session_id
            started_at = existing.started_at

        # A question bank that shrank since the last answer restarts the diagnostic
        if len(answers) >= len(questions):
            answers = []

        question = questions[len(answers)]
        answers.append(DiagnosticAnswer(
            question_id=question.id,
            question=question.text,
            answer=answer,
        ))

        total = len(questions)
        completed = len(answers) == total
        progress = DiagnosticProgress(
            tool_name=tool_name,
            completed=completed,
            score=calculate_score(answers, total) if completed else 0,
            current_question=len(answers),
            total_questions=total,
            answers=answers,
            started_at=started_at,
            completed_at=now if completed else None,
            session_id=session_id,
        )
        self.store.upsert_diagnostic_progress(progress)

        if completed:
            logger.info("Completed %s with score %d", tool_name, progress.score)
        return progress

    def retake(self, tool_name: str) -> None:
        """Forget all progress on a diagnostic so it can be taken again."""
        self.store.clear_diagnostic(tool_name)
