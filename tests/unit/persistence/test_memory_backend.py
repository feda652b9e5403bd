"""Protocol conformance of the in-memory fakes plus their own behaviour."""

from __future__ import annotations

import asyncio

import pytest

from storepnl.core.exceptions import FetchError, LinkNotFoundError
from storepnl.core.protocols import ICredentialProvider, ITabularSource
from storepnl.persistence.protocols import ICacheBackend, ILinkRegistry, IUserDirectory
from storepnl.services.credentials import DirectoryCredentialProvider
from storepnl.services.tabular_source import HttpTabularSource
from tests.fakes import MemoryCacheBackend, MemoryLinkRegistry, MemoryUserDirectory, StaticTabularSource


class TestProtocolConformance:
    def test_fakes_satisfy_protocols(self):
        assert isinstance(MemoryLinkRegistry(), ILinkRegistry)
        assert isinstance(MemoryUserDirectory(), IUserDirectory)
        assert isinstance(MemoryCacheBackend(), ICacheBackend)
        assert isinstance(StaticTabularSource(), ITabularSource)

    def test_services_satisfy_protocols(self):
        provider = DirectoryCredentialProvider(MemoryUserDirectory(), MemoryCacheBackend())
        assert isinstance(provider, ICredentialProvider)
        assert isinstance(HttpTabularSource(), ITabularSource)


class TestMemoryLinkRegistry:
    def test_crud(self):
        links = MemoryLinkRegistry()
        link = links.add_link("Actual", "https://x/a")
        assert links.list_links() == [link]
        links.delete_link(link.id)
        with pytest.raises(LinkNotFoundError):
            links.get_link(link.id)


class TestStaticTabularSource:
    def test_failure_raises_fetch_error(self):
        source = StaticTabularSource()
        source.fail("https://x/a")
        with pytest.raises(FetchError):
            asyncio.run(source.fetch("https://x/a"))
        assert source.calls == ["https://x/a"]
