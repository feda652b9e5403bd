"""Request dependencies: services from app state and the caller's session."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request

from storepnl.core.exceptions import AuthenticationError, CacheError
from storepnl.core.protocols import ICredentialProvider, ILinkRegistry
from storepnl.models.session import Role, SessionContext
from storepnl.services.dashboard import DashboardService


def get_credentials(request: Request) -> ICredentialProvider:
    return request.app.state.credentials


def get_links(request: Request) -> ILinkRegistry:
    return request.app.state.links


def get_dashboard(request: Request) -> DashboardService:
    return request.app.state.dashboard


def session_store_unavailable(exc: CacheError) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Session store unavailable: {exc}")


def get_session(
    x_session_token: str = Header(default=""),
    credentials: ICredentialProvider = Depends(get_credentials),
) -> SessionContext:
    """Resolve ``X-Session-Token`` into a SessionContext: 401 if unknown, 503 if the cache is down."""
    try:
        return credentials.resolve(x_session_token)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except CacheError as exc:
        raise session_store_unavailable(exc) from exc


def require_admin(session: SessionContext = Depends(get_session)) -> SessionContext:
    if session.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Admin role required")
    return session
