"""
DiagnosticProgress model - Persisted state of one yes/no diagnostic.

One record exists per diagnostic name. It is created on the first answer,
replaced wholesale on every later answer, and removed only when the user
chooses to retake the diagnostic.
"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from diagnostic_tracker.utils.constants import ANSWER_YES, MAX_SCORE
from diagnostic_tracker.utils.rounding import round_half_up


class DiagnosticAnswer(BaseModel):
    """A single answered question. Only "Yes" and "No" are accepted."""
    question_id: str = Field(alias="questionId")
    question: str
    answer: Literal["Yes", "No"]

    model_config = {"populate_by_name": True}


class DiagnosticInsight(BaseModel):
    """Generated insight shown next to a completed diagnostic."""
    description: str
    title: Optional[str] = None


def calculate_score(answers: List[DiagnosticAnswer], total_questions: int) -> int:
    """
    Score a diagnostic as the rounded percentage of "Yes" answers.

    Args:
        answers: Answers given so far
        total_questions: Number of questions in the diagnostic

    Returns:
        Integer score 0-100

    Raises:
        ValueError: If total_questions is not positive
    """
    if total_questions <= 0:
        raise ValueError(f"total_questions must be positive, got: {total_questions}")
    yes_count = sum(1 for a in answers if a.answer == ANSWER_YES)
    return round_half_up(Decimal(MAX_SCORE * yes_count) / Decimal(total_questions))


class DiagnosticProgress(BaseModel):
    """
    Progress through one diagnostic, keyed by tool_name.

    Invariants (checked on every construction, including loads from storage):
        - current_question <= total_questions
        - len(answers) == current_question while incomplete
        - len(answers) == total_questions once completed
        - score == calculate_score(answers, total_questions) once completed

    Attributes:
        tool_name: Diagnostic name, unique within the document
        completed: Whether the last question has been answered
        score: 0-100, meaningful only when completed
        current_question: Index of the next question to ask
        total_questions: Number of questions in the diagnostic
        answers: Answers in question order
        started_at: Epoch milliseconds of the first answer
        completed_at: Epoch milliseconds of the last answer, if completed
        session_id: Correlation token for this pass through the diagnostic
        insights: Insights attached after completion, if any
    """
    tool_name: str = Field(min_length=1, alias="toolName")
    completed: bool = False
    score: int = Field(default=0, ge=0, le=100)
    current_question: int = Field(default=0, ge=0, alias="currentQuestion")
    total_questions: int = Field(gt=0, alias="totalQuestions")
    answers: List[DiagnosticAnswer] = Field(default_factory=list)
    started_at: int = Field(ge=0, alias="startedAt")
    completed_at: Optional[int] = Field(default=None, alias="completedAt")
    session_id: str = Field(alias="sessionId")
    insights: Optional[List[DiagnosticInsight]] = None

    model_config = {"populate_by_name": True}

    @model_validator(mode='after')
    def _check_progress(self) -> 'DiagnosticProgress':
        if self.current_question > self.total_questions:
            raise ValueError(
                f"currentQuestion ({self.current_question}) exceeds "
                f"totalQuestions ({self.total_questions})"
            )

        expected_answers = self.total_questions if self.completed else self.current_question
        if len(self.answers) != expected_answers:
            raise ValueError(
                f"{self.tool_name}: expected {expected_answers} answers, "
                f"got {len(self.answers)}"
            )

        if self.completed:
            expected_score = calculate_score(self.answers, self.total_questions)
            if self.score != expected_score:
                raise ValueError(
                    f"{self.tool_name}: score {self.score} does not match "
                    f"answers (expected {expected_score})"
                )
        return self


class ResumeData(BaseModel):
    """Everything a quiz view needs to continue where the user left off."""
    tool_name: str = Field(alias="toolName")
    current_question: int = Field(alias="currentQuestion")
    total_questions: int = Field(alias="totalQuestions")
    session_id: str = Field(alias="sessionId")
    answers: List[DiagnosticAnswer]

    model_config = {"populate_by_name": True}
