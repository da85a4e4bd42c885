"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_proxy
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger, StaticFallback
from core.target import TargetResolver
from services.forwarding_service import ForwardingService
from services.static_site import StaticSite
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    *,
    static_fallback: StaticFallback | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    header_builder = HeaderBuilder()
    fallback = static_fallback or StaticSite(config.static.root, config.static.index)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.relay.max_connections,
            max_keepalive_connections=config.relay.max_keepalive_connections,
        )
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.relay.timeout_seconds, read=None),
            limits=limits,
            follow_redirects=True,
            transport=transport,
        )
        app.state.upstream_client = UpstreamClient(
            client,
            header_builder,
            timeout=config.relay.timeout_seconds,
        )
        app.state.forwarding_service = ForwardingService(
            resolver=TargetResolver(),
            header_builder=header_builder,
        )
        app.state.static_fallback = fallback
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="CORS Relay",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    async def proxy(request: Request):
        return await handle_proxy(request, config, logger)

    # No method list: every verb reaches the handler
    app.router.add_route("/{path:path}", proxy, include_in_schema=False)

    return app
