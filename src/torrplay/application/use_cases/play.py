"""Play use case: resolve which torrent file to stream.

Runs the request state machine up to (but not including) the actual stream
dispatch, which needs the HTTP request and therefore lives in the router:

    ParseInput -> ResolveLink -> ResolveTorrent -> AuthorizationGate
    -> EnsureRegistered -> AwaitMetadata -> ResolveIndex

Every failure raises a PlayError subclass and ends the request. There is no
retry and no partial result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from torrplay.domain.entities import (
    AUTO_SELECT_INDEX,
    InvalidIndexError,
    MetadataNotReadyError,
    NoSuitableFileError,
    PlayInputError,
    PlayRequest,
    TorrentState,
    TorrentUnavailableError,
    UnauthorizedError,
)
from torrplay.domain.ports import LinkParserPort, TorrentHandle, TorrentManagerPort
from torrplay.domain.selection import auto_select

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PlayTarget:
    """Resolved torrent handle and file index, ready to stream."""

    torrent: TorrentHandle
    index: int


_INDEX_RE = re.compile(r"[+-]?[0-9]+")


def _parse_index(token: str) -> int | None:
    # Plain decimal only; int() alone would also accept " 5" and "1_0".
    if not _INDEX_RE.fullmatch(token):
        return None
    return int(token)


class PlayUseCase:
    """Resolves a PlayRequest to a PlayTarget.

    Stateless; one instance is shared by all requests.
    """

    def __init__(
        self,
        *,
        link_parser: LinkParserPort,
        torrents: TorrentManagerPort,
    ) -> None:
        self._link_parser = link_parser
        self._torrents = torrents

    async def execute(self, request: PlayRequest) -> PlayTarget:
        # ParseInput
        if not request.link or not request.index:
            raise PlayInputError("link should not be empty")

        # ResolveLink (LinkParseError propagates)
        spec = self._link_parser.parse(request.link)

        # ResolveTorrent + AuthorizationGate
        torrent = await self._torrents.get_torrent(spec.info_hash)
        if torrent is None:
            if request.auth_required and not request.auth_user:
                log.info("play_unauthorized", info_hash=spec.info_hash)
                raise UnauthorizedError("authorization required")
            log.warning("play_torrent_not_found", info_hash=spec.info_hash)
            raise TorrentUnavailableError("error get torrent")

        # EnsureRegistered (TorrentRegistrationError propagates)
        if torrent.state == TorrentState.IN_DB:
            log.debug("play_activating_stored_torrent", info_hash=spec.info_hash)
            torrent = await self._torrents.add_torrent(
                spec,
                torrent.title,
                torrent.poster,
                torrent.data,
                torrent.category,
            )

        # AwaitMetadata (single probe, no waiting here)
        if not torrent.got_info():
            log.warning(
                "play_metadata_not_ready",
                info_hash=spec.info_hash,
                state=torrent.state.name,
            )
            raise MetadataNotReadyError("timeout connection torrent")

        index = self._resolve_index(torrent, request)

        log.info(
            "play_index_resolved",
            info_hash=spec.info_hash,
            token=request.index,
            index=index,
        )
        return PlayTarget(torrent=torrent, index=index)

    def _resolve_index(self, torrent: TorrentHandle, request: PlayRequest) -> int:
        """ResolveIndex state.

        Precedence: single-file torrent > literal integer > auto-select
        sentinel. Anything else is a bad request.
        """
        files = torrent.files()
        if len(files) == 1:
            return files[0].id

        index = _parse_index(request.index)

        if index == AUTO_SELECT_INDEX:
            status = torrent.current_status()
            selected = auto_select(status.file_stats, request.hints)
            if selected is None:
                log.info(
                    "play_auto_select_no_match",
                    info_hash=status.info_hash,
                    files=len(status.file_stats),
                    filename=request.hints.filename,
                    season=request.hints.season,
                    episode=request.hints.episode,
                )
                raise NoSuitableFileError(
                    "no suitable file found for auto-selection"
                )
            return selected

        if index is None or index < 0:
            raise InvalidIndexError('"index" is wrong')

        return index
