"""Login / logout endpoints issuing opaque session tokens."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel

from storepnl.api.deps import get_credentials, get_dashboard, get_session, session_store_unavailable
from storepnl.core.exceptions import AuthenticationError, CacheError
from storepnl.core.protocols import ICredentialProvider
from storepnl.models.session import SessionContext
from storepnl.services.dashboard import DashboardService

router = APIRouter(tags=["session"])


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/session")
async def login(
    body: LoginRequest,
    credentials: ICredentialProvider = Depends(get_credentials),
) -> dict:
    try:
        token = credentials.login(body.email, body.password)
        context = credentials.resolve(token)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except CacheError as exc:
        raise session_store_unavailable(exc) from exc
    return {"token": token, "session": context.model_dump()}


@router.get("/session")
async def whoami(session: SessionContext = Depends(get_session)) -> dict:
    return session.model_dump()


@router.delete("/session", status_code=204)
async def logout(
    x_session_token: str = Header(default=""),
    credentials: ICredentialProvider = Depends(get_credentials),
    dashboard: DashboardService = Depends(get_dashboard),
) -> None:
    """Invalidate the token and drop the caller's loaded datasets."""
    try:
        session = credentials.resolve(x_session_token)
    except AuthenticationError:
        return None
    except CacheError as exc:
        raise session_store_unavailable(exc) from exc
    try:
        credentials.logout(x_session_token)
    except CacheError as exc:
        raise session_store_unavailable(exc) from exc
    dashboard.drop_workspace(session)
    return None
