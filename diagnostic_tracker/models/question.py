"""Question model - One entry of a diagnostic's question bank."""

from pydantic import BaseModel, Field


class Question(BaseModel):
    """A yes/no question shown during a diagnostic."""
    id: str = Field(min_length=1)
    text: str = Field(min_length=1)
