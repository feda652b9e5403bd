"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

import asyncio
import uuid

from storepnl.core.exceptions import FetchError, LinkNotFoundError
from storepnl.models.links import ExcelLink, UserAccount
from storepnl.models.records import TabularData


class MemoryLinkRegistry:
    """Dict-backed ILinkRegistry for unit tests."""

    def __init__(self, links: list[ExcelLink] | None = None) -> None:
        self._links: dict[str, ExcelLink] = {link.id: link for link in links or []}

    def list_links(self) -> list[ExcelLink]:
        return sorted(self._links.values(), key=lambda link: link.name.lower())

    def get_link(self, link_id: str) -> ExcelLink:
        try:
            return self._links[link_id]
        except KeyError:
            raise LinkNotFoundError(f"No data-source link with id={link_id!r}") from None

    def add_link(self, name: str, url: str) -> ExcelLink:
        link = ExcelLink(id=uuid.uuid4().hex, name=name, url=url)
        self._links[link.id] = link
        return link

    def update_link(self, link: ExcelLink) -> ExcelLink:
        self.get_link(link.id)
        self._links[link.id] = link
        return link

    def delete_link(self, link_id: str) -> None:
        self._links.pop(link_id, None)


class MemoryUserDirectory:
    """Dict-backed IUserDirectory for unit tests."""

    def __init__(self, users: list[UserAccount] | None = None) -> None:
        self._users = {u.email.lower(): u for u in users or []}

    def find_by_email(self, email: str) -> UserAccount | None:
        return self._users.get(email.strip().lower())


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)


class StaticTabularSource:
    """Canned-response ITabularSource for unit tests.

    URLs registered with ``fail`` raise ``FetchError``; a per-URL
    ``asyncio.Event`` can hold a fetch open until the test releases it.
    """

    def __init__(self, tables: dict[str, TabularData] | None = None) -> None:
        self._tables: dict[str, TabularData] = dict(tables or {})
        self._gates: dict[str, asyncio.Event] = {}
        self._failures: set[str] = set()
        self.calls: list[str] = []

    def add(self, url: str, table: TabularData) -> None:
        self._tables[url] = table

    def fail(self, url: str) -> None:
        self._failures.add(url)

    def hold(self, url: str) -> asyncio.Event:
        gate = self._gates[url] = asyncio.Event()
        return gate

    async def fetch(self, url: str) -> TabularData:
        self.calls.append(url)
        gate = self._gates.get(url)
        if gate is not None:
            await gate.wait()
        if url in self._failures or url not in self._tables:
            raise FetchError(url, "canned failure")
        return self._tables[url]
