"""Play endpoint: resolve a torrent file and stream it."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, HTTPException, Request
from starlette.responses import Response

from torrplay.domain.entities import (
    PlayError,
    PlayRequest,
    SelectionHints,
    UnauthorizedError,
)
from torrplay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["play"])


@router.api_route("/play/{hash}/{id}", methods=["GET", "HEAD"])
async def play(
    request: Request,
    hash: str,
    id: str,
    season: str | None = None,
    episode: str | None = None,
    filename: str | None = None,
) -> Response:
    """Play a file of the torrent referenced by *hash*.

    ``id`` is the file index inside the torrent, or ``-10`` to pick the file
    automatically. Auto-selection uses ``filename`` first, then
    ``season`` + ``episode``, and otherwise takes the largest video file.

    Raises:
        HTTPException(400): Index malformed or unresolved.
        HTTPException(401): Authorization required (with WWW-Authenticate).
        HTTPException(404): Empty hash/id, or auto-selection found nothing.
        HTTPException(500): Link parse failure, torrent unavailable,
            registration failure, metadata not ready.
    """
    state = cast(AppState, request.app.state)

    play_request = PlayRequest(
        link=hash,
        index=id,
        hints=SelectionHints(filename=filename, season=season, episode=episode),
        auth_required=getattr(request.state, "auth_required", False),
        auth_user=getattr(request.state, "auth_user", None),
    )

    try:
        target = await state.play_uc.execute(play_request)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.detail,
            headers={"WWW-Authenticate": f"Basic realm={state.config.auth.realm}"},
        ) from e
    except PlayError as e:
        log.warning(
            "play_request_failed",
            hash=hash,
            id=id,
            error=type(e).__name__,
            status_code=e.status_code,
            detail=e.detail,
        )
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e

    return await target.torrent.stream(target.index, request)
