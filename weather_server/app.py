"""ASGI application hosting the MCP endpoint."""

from __future__ import annotations

import contextlib
from typing import AsyncIterator, Dict

import structlog
from fastapi import FastAPI

from weather_server.tools import create_mcp_server


logger = structlog.get_logger(__name__)


def create_app(host: str = "127.0.0.1") -> FastAPI:
    """FastAPI app with ``/health`` and the MCP streamable-HTTP endpoint at ``/mcp``.

    The MCP session manager runs for the lifetime of the app; on shutdown it
    lets in-flight tool calls finish before closing sessions.
    """

    mcp_server = create_mcp_server(host)
    mcp_app = mcp_server.streamable_http_app()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with mcp_server.session_manager.run():
            logger.info("mcp.session_manager.started")
            yield
        logger.info("mcp.session_manager.stopped")

    app = FastAPI(title="Cardea Weather MCP Server", lifespan=lifespan)

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    app.mount("/", mcp_app)
    return app
