"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from storepnl.core.protocols import ICacheBackend, ILinkRegistry, IUserDirectory

__all__ = ["ICacheBackend", "ILinkRegistry", "IUserDirectory"]
