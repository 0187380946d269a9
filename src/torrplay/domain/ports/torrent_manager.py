"""Ports for the torrent engine (handle lookup, registration, streaming)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from starlette.requests import Request
from starlette.responses import Response

from torrplay.domain.entities.torrent import (
    CandidateFile,
    TorrentSpec,
    TorrentState,
    TorrentStatus,
)


@runtime_checkable
class TorrentHandle(Protocol):
    """A torrent known to the engine.

    ``got_info()``, ``files()`` and ``current_status()`` are synchronous reads
    of the handle's current snapshot. They never wait on the network.
    """

    @property
    def state(self) -> TorrentState: ...

    @property
    def title(self) -> str: ...

    @property
    def poster(self) -> str: ...

    @property
    def data(self) -> str: ...

    @property
    def category(self) -> str: ...

    def got_info(self) -> bool:
        """True once the file list and sizes are known."""
        ...

    def files(self) -> list[CandidateFile]: ...

    def current_status(self) -> TorrentStatus: ...

    async def stream(self, index: int, request: Request) -> Response:
        """Stream file *index* to the client.

        The inbound request is passed through unmodified (Range headers etc.).
        Streaming errors are the implementation's responsibility.
        """
        ...


@runtime_checkable
class TorrentManagerPort(Protocol):
    """Async interface for looking up and registering torrents."""

    async def get_torrent(self, info_hash: str) -> TorrentHandle | None:
        """Return the handle for *info_hash*, or None if the engine has none."""
        ...

    async def add_torrent(
        self,
        spec: TorrentSpec,
        title: str,
        poster: str,
        data: str,
        category: str,
    ) -> TorrentHandle:
        """Register *spec* as an active torrent.

        Raises TorrentRegistrationError on failure.
        """
        ...
