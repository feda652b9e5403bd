"""storepnl exception hierarchy."""

from __future__ import annotations


class StorePnLError(Exception):
    """Base exception for all storepnl errors."""


class FetchError(StorePnLError):
    """A tabular source could not be downloaded or decoded."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"Fetch failed for {url!r}: {message}")


class SourceLayoutError(StorePnLError):
    """A source does not carry the positional month/store columns."""

    def __init__(self, source_id: str, column_count: int) -> None:
        self.source_id = source_id
        self.column_count = column_count
        super().__init__(
            f"Source {source_id!r} has {column_count} column(s); "
            "at least two (month, store) are required"
        )


class ContractViolationError(StorePnLError):
    """An engine function was called with input outside its contract."""


class LinkNotFoundError(StorePnLError):
    """No data-source link registered under the requested id."""


class AuthenticationError(StorePnLError):
    """Credential check failed or the session token is unknown."""


class CacheError(StorePnLError):
    """Redis cache operation failed."""
