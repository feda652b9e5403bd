"""Data-source link registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from storepnl.api.deps import get_links, get_session, require_admin
from storepnl.core.exceptions import LinkNotFoundError
from storepnl.core.protocols import ILinkRegistry
from storepnl.models.session import SessionContext

router = APIRouter(prefix="/links", tags=["links"])


class LinkRequest(BaseModel):
    name: str
    url: str


@router.get("")
async def list_links(
    _: SessionContext = Depends(get_session),
    links: ILinkRegistry = Depends(get_links),
) -> list[dict]:
    return [link.model_dump() for link in links.list_links()]


@router.post("", status_code=201)
async def add_link(
    body: LinkRequest,
    _: SessionContext = Depends(require_admin),
    links: ILinkRegistry = Depends(get_links),
) -> dict:
    return links.add_link(body.name, body.url).model_dump()


@router.delete("/{link_id}", status_code=204)
async def delete_link(
    link_id: str,
    _: SessionContext = Depends(require_admin),
    links: ILinkRegistry = Depends(get_links),
) -> None:
    try:
        links.get_link(link_id)
    except LinkNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    links.delete_link(link_id)
