"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from storepnl.api.routes import dashboard, health, links, session
from storepnl.core.config import AppSettings
from storepnl.core.log import configure_logging
from storepnl.persistence import create_persistence
from storepnl.services.credentials import DirectoryCredentialProvider
from storepnl.services.dashboard import DashboardService
from storepnl.services.tabular_source import HttpTabularSource


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings = AppSettings()
    configure_logging(settings.log_level)
    link_registry, users, cache = create_persistence(settings)
    source = HttpTabularSource(
        timeout=settings.fetch.timeout,
        csv_encoding=settings.fetch.csv_encoding,
        user_agent=settings.fetch.user_agent,
    )

    app.state.settings = settings
    app.state.links = link_registry
    app.state.cache = cache
    app.state.credentials = DirectoryCredentialProvider(users, cache, settings.redis.session_ttl)
    app.state.dashboard = DashboardService(
        link_registry, source, percent_sentinel=settings.percent_sentinel,
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Store P&L Dashboard",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(session.router)
    app.include_router(links.router)
    app.include_router(dashboard.router, prefix="/dashboard")
    return app
