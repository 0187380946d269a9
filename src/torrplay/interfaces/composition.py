"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from torrplay.application.use_cases.play import PlayUseCase
from torrplay.infrastructure.torrserver.client import TorrServerClient
from torrplay.infrastructure.torrserver.link_parser import MagnetLinkParser
from torrplay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan hook: create and close all resources.

    Order matters:
        1. HTTP client (required by the engine client)
        2. Link parser + engine client (ports)
        3. Play use case
    """
    state = cast(AppState, app.state)
    config = state.config
    log.info("effective_config", config=config.to_sectioned_dict())

    # 1) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.engine_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
    )
    log.info("http_client_initialized", timeout=config.engine_timeout_seconds)

    # 2) Ports
    state.link_parser = MagnetLinkParser()
    state.torrents = TorrServerClient(
        http_client=state.http_client,
        base_url=config.engine_base_url,
        info_wait_seconds=config.engine_info_wait_seconds,
        poll_interval_seconds=config.engine_poll_interval_seconds,
        save_to_db=config.engine_save_to_db,
    )
    log.info("torrent_engine_configured", base_url=config.engine_base_url)

    # 3) Use cases
    state.play_uc = PlayUseCase(
        link_parser=state.link_parser,
        torrents=state.torrents,
    )

    log.info("app_startup_complete", auth_enabled=config.auth.enabled)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
