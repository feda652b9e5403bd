"""Protocol interfaces for all storepnl abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from storepnl.models.links import ExcelLink, UserAccount
from storepnl.models.records import TabularData
from storepnl.models.session import SessionContext


# ---------------------------------------------------------------------------
# Tabular data source
# ---------------------------------------------------------------------------

@runtime_checkable
class ITabularSource(Protocol):
    """Downloads a spreadsheet/CSV URL and decodes it into ordered columns + rows."""

    async def fetch(self, url: str) -> TabularData: ...


# ---------------------------------------------------------------------------
# Persistence: Link registry
# ---------------------------------------------------------------------------

@runtime_checkable
class ILinkRegistry(Protocol):
    """Persisted list of available data sources (actual/budget candidates)."""

    def list_links(self) -> list[ExcelLink]: ...

    def get_link(self, link_id: str) -> ExcelLink: ...

    def add_link(self, name: str, url: str) -> ExcelLink: ...

    def update_link(self, link: ExcelLink) -> ExcelLink: ...

    def delete_link(self, link_id: str) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: User directory
# ---------------------------------------------------------------------------

@runtime_checkable
class IUserDirectory(Protocol):
    """Lookup of dashboard users by email."""

    def find_by_email(self, email: str) -> UserAccount | None: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

@runtime_checkable
class ICredentialProvider(Protocol):
    """Resolves a session token into the caller's role + store assignment."""

    def login(self, email: str, password: str) -> str: ...

    def resolve(self, token: str) -> SessionContext: ...

    def logout(self, token: str) -> None: ...
