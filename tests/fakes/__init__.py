"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from storepnl.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryLinkRegistry,
    MemoryUserDirectory,
    StaticTabularSource,
)

__all__ = ["MemoryCacheBackend", "MemoryLinkRegistry", "MemoryUserDirectory", "StaticTabularSource"]
