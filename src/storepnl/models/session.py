"""Caller session context passed explicitly into the filter engine."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Role(StrEnum):
    ADMIN = "admin"
    CLIENT = "client"


class SessionContext(BaseModel):
    """Role plus store assignment for the current caller."""

    role: Role
    assigned_stores: list[str] = Field(default_factory=list)
    user_id: str = ""

    @property
    def is_restricted(self) -> bool:
        return self.role == Role.CLIENT
