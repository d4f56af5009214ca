"""User entity."""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """User record.

    The id is generated when the object is built, before it is ever
    persisted, and cannot be reassigned.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, frozen=True)
    name: str
    email: str

    def __str__(self) -> str:
        return f"User(id={self.id}, name={self.name}, email={self.email})"
