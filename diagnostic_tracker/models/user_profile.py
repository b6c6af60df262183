"""
UserProfile model - Contact details of the person using the dashboard.

Uses Pydantic v2 for validation. Serialized with camelCase aliases so the
persisted document keeps its established layout.
"""

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """
    Name, email and last-active time of the dashboard user.
    Why: Reports are addressed to this person and the dashboard greets them.
    """
    name: str = ""
    email: str = ""
    last_active: int = Field(default=0, ge=0, alias="lastActive")  # epoch ms

    model_config = {"populate_by_name": True}
