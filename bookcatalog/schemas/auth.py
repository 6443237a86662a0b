"""Schemas for the authenticated identity carried by a session."""

from pydantic import BaseModel, ConfigDict


class SessionIdentity(BaseModel):
    """Identity bound to a live session (denormalized from the user row)."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    username: str
