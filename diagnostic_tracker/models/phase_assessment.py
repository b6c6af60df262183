"""
PhaseAssessment model - Result of the one-time business-stage questionnaire.
"""

from typing import List

from pydantic import BaseModel, Field, model_validator


class PhaseAssessment(BaseModel):
    """
    Outcome of the phase assessment.

    Re-taking the assessment overwrites this record wholesale; nothing is
    edited in place.

    Attributes:
        completed: False until the assessment has been finished
        phase: Name of the business phase the user was placed in
        score: 0-100 assessment score
        completed_at: Epoch milliseconds of completion (0 when not completed)
        answers: Yes/No answers in question order
    """
    completed: bool = False
    phase: str = ""
    score: int = Field(default=0, ge=0, le=100)
    completed_at: int = Field(default=0, ge=0, alias="completedAt")
    answers: List[bool] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @model_validator(mode='after')
    def _check_completion(self) -> 'PhaseAssessment':
        if self.completed:
            if not self.phase:
                raise ValueError("Completed phase assessment must name a phase")
            if self.completed_at <= 0:
                raise ValueError(
                    f"Completed phase assessment needs completedAt > 0, got: {self.completed_at}"
                )
        return self
