"""Registry documents: data-source links and dashboard users."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from storepnl.models.session import Role

Stripped = Annotated[str, StringConstraints(strip_whitespace=True)]


class ExcelLink(BaseModel):
    """A registered spreadsheet/CSV source (actual or budget candidate)."""

    id: str
    name: str
    url: str


class UserAccount(BaseModel):
    """Dashboard user as held in the user directory.

    Identity fields are trimmed; ``password`` is kept byte-for-byte.
    """

    id: Stripped
    name: Stripped = ""
    email: Stripped
    role: Role = Role.CLIENT
    stores: list[Stripped] = Field(default_factory=list)
    password: str = ""
