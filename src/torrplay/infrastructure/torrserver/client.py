"""httpx adapter for a TorrServer-compatible torrent engine.

Engine API used:
    POST {base}/torrents  {"action": "get", "hash": ...}      -> status JSON | 404
    POST {base}/torrents  {"action": "add", "link": ..., ...} -> status JSON
    GET  {base}/stream/{name}?link={hash}&index={i}&play       -> file bytes

Streaming passes Range/conditional headers through and forwards the
engine's body chunk by chunk without buffering the whole file.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx
import structlog
from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import Response, StreamingResponse

from torrplay.domain.entities import (
    CandidateFile,
    TorrentRegistrationError,
    TorrentSpec,
    TorrentState,
    TorrentStatus,
    TorrentUnavailableError,
)
from torrplay.domain.selection.video import basename

log = structlog.get_logger(__name__)

_FORWARD_REQUEST_HEADERS = (
    "range",
    "if-range",
    "if-none-match",
    "if-modified-since",
)
_FORWARD_RESPONSE_HEADERS = (
    "content-length",
    "content-range",
    "accept-ranges",
    "etag",
    "last-modified",
    "content-disposition",
)
_CHUNK_SIZE = 65536


def _parse_state(raw: Any) -> TorrentState:
    try:
        return TorrentState(int(raw))
    except (TypeError, ValueError):
        return TorrentState.ADDED


def parse_status(payload: dict[str, Any]) -> TorrentStatus:
    """Build a TorrentStatus from the engine's status JSON."""
    file_stats = tuple(
        CandidateFile(
            id=int(f.get("id", 0)),
            path=str(f.get("path", "")),
            length=int(f.get("length", 0) or 0),
        )
        for f in payload.get("file_stats") or []
    )
    return TorrentStatus(
        info_hash=str(payload.get("hash", "")).lower(),
        state=_parse_state(payload.get("stat")),
        title=payload.get("title") or "",
        poster=payload.get("poster") or "",
        data=payload.get("data") or "",
        category=payload.get("category") or "",
        file_stats=file_stats,
    )


def _decode_status(resp: httpx.Response) -> TorrentStatus:
    """Decode a status response; any malformed body raises ValueError."""
    payload = resp.json()
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    try:
        return parse_status(payload)
    except (TypeError, AttributeError) as e:
        raise ValueError(f"malformed status: {e}") from e


class RemoteTorrent:
    """TorrentHandle backed by one engine status snapshot."""

    def __init__(self, status: TorrentStatus, client: TorrServerClient) -> None:
        self._status = status
        self._client = client

    @property
    def state(self) -> TorrentState:
        return self._status.state

    @property
    def title(self) -> str:
        return self._status.title

    @property
    def poster(self) -> str:
        return self._status.poster

    @property
    def data(self) -> str:
        return self._status.data

    @property
    def category(self) -> str:
        return self._status.category

    def got_info(self) -> bool:
        return self._status.state in (TorrentState.PRELOAD, TorrentState.WORKING)

    def files(self) -> list[CandidateFile]:
        return list(self._status.file_stats)

    def current_status(self) -> TorrentStatus:
        return self._status

    async def stream(self, index: int, request: Request) -> Response:
        name = next(
            (basename(f.path) for f in self._status.file_stats if f.id == index),
            "file",
        )
        return await self._client.open_stream(
            self._status.info_hash, index, name, request
        )


class TorrServerClient:
    """TorrentManagerPort implementation talking to the engine over HTTP.

    Args:
        http_client: Shared ``httpx.AsyncClient`` (owned by the lifespan).
        base_url: Engine root URL, e.g. ``http://127.0.0.1:8090``.
        info_wait_seconds: After ``add``, poll this long for metadata.
            0 disables waiting.
        poll_interval_seconds: Delay between metadata polls.
        save_to_db: Ask the engine to persist torrents added by us.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str,
        info_wait_seconds: float = 20.0,
        poll_interval_seconds: float = 0.5,
        save_to_db: bool = False,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._info_wait = info_wait_seconds
        self._poll_interval = poll_interval_seconds
        self._save_to_db = save_to_db

    async def _torrents_action(self, payload: dict[str, Any]) -> httpx.Response:
        return await self._http.post(f"{self._base_url}/torrents", json=payload)

    async def get_torrent(self, info_hash: str) -> RemoteTorrent | None:
        try:
            resp = await self._torrents_action({"action": "get", "hash": info_hash})
        except httpx.HTTPError as e:
            log.warning("engine_unreachable", info_hash=info_hash, error=str(e))
            raise TorrentUnavailableError(f"torrent engine unreachable: {e}") from e

        if resp.status_code == 404:
            return None
        if resp.is_error:
            log.warning(
                "engine_get_failed",
                info_hash=info_hash,
                status_code=resp.status_code,
            )
            raise TorrentUnavailableError(
                f"torrent engine returned {resp.status_code}"
            )

        try:
            status = _decode_status(resp)
        except ValueError as e:
            log.warning("engine_bad_response", info_hash=info_hash, error=str(e))
            raise TorrentUnavailableError(
                f"torrent engine sent bad status: {e}"
            ) from e

        return RemoteTorrent(status, self)

    async def add_torrent(
        self,
        spec: TorrentSpec,
        title: str,
        poster: str,
        data: str,
        category: str,
    ) -> RemoteTorrent:
        payload = {
            "action": "add",
            "link": spec.to_magnet(),
            "title": title,
            "poster": poster,
            "data": data,
            "category": category,
            "save_to_db": self._save_to_db,
        }
        try:
            resp = await self._torrents_action(payload)
            resp.raise_for_status()
            status = _decode_status(resp)
        except (httpx.HTTPError, ValueError) as e:
            log.warning("engine_add_failed", info_hash=spec.info_hash, error=str(e))
            raise TorrentRegistrationError(f"error add torrent: {e}") from e

        torrent = RemoteTorrent(status, self)
        log.info(
            "engine_torrent_added",
            info_hash=spec.info_hash,
            state=torrent.state.name,
        )
        return await self._wait_for_info(spec.info_hash, torrent)

    async def _wait_for_info(
        self, info_hash: str, torrent: RemoteTorrent
    ) -> RemoteTorrent:
        """Poll until the engine reports metadata or the wait budget is spent."""
        deadline = time.monotonic() + self._info_wait
        while not torrent.got_info() and time.monotonic() < deadline:
            await asyncio.sleep(self._poll_interval)
            refreshed = await self.get_torrent(info_hash)
            if refreshed is not None:
                torrent = refreshed
        return torrent

    async def open_stream(
        self, info_hash: str, index: int, name: str, request: Request
    ) -> Response:
        """Proxy one file from the engine to the client."""
        headers = {
            k: v
            for k in _FORWARD_REQUEST_HEADERS
            if (v := request.headers.get(k)) is not None
        }
        upstream = self._http.build_request(
            request.method,
            f"{self._base_url}/stream/{quote(name)}",
            params={"link": info_hash, "index": str(index), "play": ""},
            headers=headers,
            timeout=httpx.Timeout(self._http.timeout.connect, read=None),
        )

        try:
            resp = await self._http.send(upstream, stream=True)
        except httpx.HTTPError as e:
            log.warning(
                "engine_stream_failed", info_hash=info_hash, index=index, error=str(e)
            )
            return Response(status_code=502, content=f"stream error: {e}")

        out_headers = {
            k: v
            for k in _FORWARD_RESPONSE_HEADERS
            if (v := resp.headers.get(k)) is not None
        }
        media_type = resp.headers.get("content-type", "application/octet-stream")

        log.info(
            "engine_stream_opened",
            info_hash=info_hash,
            index=index,
            status_code=resp.status_code,
            range=headers.get("range"),
        )

        if request.method == "HEAD":
            await resp.aclose()
            return Response(
                status_code=resp.status_code,
                headers=out_headers,
                media_type=media_type,
            )

        async def _iter() -> AsyncIterator[bytes]:
            try:
                async for chunk in resp.aiter_bytes(chunk_size=_CHUNK_SIZE):
                    yield chunk
            finally:
                await resp.aclose()

        return StreamingResponse(
            _iter(),
            status_code=resp.status_code,
            headers=out_headers,
            media_type=media_type,
            background=BackgroundTask(resp.aclose),
        )
