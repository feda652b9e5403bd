"""DirectoryCredentialProvider: user-directory credential check with cached sessions."""

from __future__ import annotations

import logging
import secrets

from storepnl.core.exceptions import AuthenticationError
from storepnl.core.protocols import ICacheBackend, IUserDirectory
from storepnl.models.session import SessionContext

logger = logging.getLogger(__name__)


class DirectoryCredentialProvider:
    """ICredentialProvider backed by an IUserDirectory and a session cache."""

    SESSION_PREFIX = "session:"

    def __init__(self, users: IUserDirectory, cache: ICacheBackend, ttl: int = 8 * 60 * 60) -> None:
        self._users = users
        self._cache = cache
        self._ttl = ttl

    def login(self, email: str, password: str) -> str:
        """Verify credentials and return a new session token."""
        user = self._users.find_by_email(email.strip().lower())
        if user is None or not secrets.compare_digest(
            user.password.encode("utf-8"), password.encode("utf-8")
        ):
            raise AuthenticationError(f"Invalid credentials for {email!r}")

        token = secrets.token_urlsafe(32)
        context = SessionContext(role=user.role, assigned_stores=user.stores, user_id=user.id)
        self._cache.setex(self.SESSION_PREFIX + token, self._ttl, context.model_dump_json())
        logger.info("Session opened for user %s (%s)", user.id, user.role)
        return token

    def resolve(self, token: str) -> SessionContext:
        cached = self._cache.get(self.SESSION_PREFIX + token) if token else None
        if cached is None:
            raise AuthenticationError("Unknown or expired session")
        return SessionContext.model_validate_json(cached)

    def logout(self, token: str) -> None:
        self._cache.delete(self.SESSION_PREFIX + token)
