"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from torrplay.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from torrplay.application.use_cases.play import PlayUseCase
    from torrplay.domain.ports import LinkParserPort, TorrentManagerPort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Domain Ports
    link_parser: LinkParserPort
    torrents: TorrentManagerPort

    # Application Services
    play_uc: PlayUseCase
