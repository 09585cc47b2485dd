"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_forward
from core.config import Config
from core.protocols import RequestLogger
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    transport replaces the network transport of the shared upstream client;
    tests pass an httpx.MockTransport here.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        http_client = httpx.AsyncClient(
            timeout=300.0,
            limits=limits,
            follow_redirects=True,
            max_redirects=10,
            transport=transport,
        )
        app.state.upstream_client = UpstreamClient(http_client)
        logger.log_event("info", "Starting proxy re-encryption server", port=config.proxy.port)
        try:
            yield
        finally:
            await http_client.aclose()

    app = FastAPI(title="Re-encryption Proxy", version="0.1.0", lifespan=lifespan)

    @app.get("/")
    async def proxy_forward(request: Request):
        return await handle_forward(request, logger)

    return app
