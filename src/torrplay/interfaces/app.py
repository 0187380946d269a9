"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from torrplay import __version__
from torrplay.infrastructure.config import AppConfig
from torrplay.interfaces.api.middleware import BasicAuthMiddleware
from torrplay.interfaces.app_state import AppState
from torrplay.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration only, no resource initialization.

    Resources (HTTP client, engine client, use cases) are created in lifespan().
    """
    app = FastAPI(
        title="torrplay",
        description="Resolves and streams files from a torrent engine",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.add_middleware(
        BasicAuthMiddleware,
        enabled=config.auth.enabled,
        accounts=config.auth.accounts,
    )

    from torrplay.interfaces.api.play.router import router as play_router

    app.include_router(play_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        """Liveness probe: 200 as long as the process is running."""
        return {"status": "ok"}

    @app.get("/echo")
    async def echo() -> dict[str, str]:
        return {"name": config.app_name, "version": __version__}

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                elapsed_ms=round((time.perf_counter() - started) * 1000.0, 2),
                client=request.client.host if request.client else None,
            )

    return app
