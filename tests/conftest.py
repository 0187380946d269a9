"""Shared test fixtures for torrplay test suite."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request
from starlette.responses import Response

from torrplay.domain.entities import (
    CandidateFile,
    TorrentSpec,
    TorrentState,
    TorrentStatus,
)

INFO_HASH = "c9e15763f722f23e98a29decdfae341b98d53056"

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def season_files() -> list[CandidateFile]:
    """Multi-file season pack with extras and a sample."""
    return [
        CandidateFile(id=1, path="Show.S01/Show.S01E01.1080p.mkv", length=1_500),
        CandidateFile(id=2, path="Show.S01/Show.S01E02.1080p.mkv", length=1_400),
        CandidateFile(id=3, path="Show.S01/Show.S01E02.sample.mkv", length=50),
        CandidateFile(id=4, path="Show.S01/Show.S01E01.srt", length=40),
        CandidateFile(id=5, path="Show.S01/info.nfo", length=2),
    ]


@pytest.fixture()
def torrent_spec() -> TorrentSpec:
    return TorrentSpec(info_hash=INFO_HASH, display_name="Show.S01")


# ---------------------------------------------------------------------------
# Fake torrent handle
# ---------------------------------------------------------------------------


@dataclass
class FakeTorrent:
    """In-memory TorrentHandle."""

    file_stats: list[CandidateFile] = field(default_factory=list)
    state: TorrentState = TorrentState.WORKING
    title: str = "Show.S01"
    poster: str = "https://example.com/poster.jpg"
    data: str = '{"source": "test"}'
    category: str = "tv"
    info_hash: str = INFO_HASH
    streamed: list[int] = field(default_factory=list)

    def got_info(self) -> bool:
        return self.state in (TorrentState.PRELOAD, TorrentState.WORKING)

    def files(self) -> list[CandidateFile]:
        return list(self.file_stats)

    def current_status(self) -> TorrentStatus:
        return TorrentStatus(
            info_hash=self.info_hash,
            state=self.state,
            title=self.title,
            file_stats=tuple(self.file_stats),
        )

    async def stream(self, index: int, request: Request) -> Response:
        self.streamed.append(index)
        return Response(
            content=f"file-{index}".encode(),
            media_type="application/octet-stream",
        )


@pytest.fixture()
def fake_torrent(season_files: list[CandidateFile]) -> FakeTorrent:
    return FakeTorrent(file_stats=season_files)


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_link_parser(torrent_spec: TorrentSpec) -> MagicMock:
    """Mock LinkParserPort (synchronous)."""
    parser = MagicMock()
    parser.parse.return_value = torrent_spec
    return parser


@pytest.fixture()
def mock_torrents(fake_torrent: FakeTorrent) -> AsyncMock:
    """Mock TorrentManagerPort returning fake_torrent."""
    manager = AsyncMock()
    manager.get_torrent = AsyncMock(return_value=fake_torrent)
    manager.add_torrent = AsyncMock(return_value=fake_torrent)
    return manager


@pytest.fixture()
def make_torrent(
    season_files: list[CandidateFile],
) -> Callable[..., FakeTorrent]:
    """Factory for FakeTorrent; defaults to the season pack in WORKING state."""

    def _make(
        file_stats: list[CandidateFile] | None = None,
        state: TorrentState = TorrentState.WORKING,
    ) -> FakeTorrent:
        return FakeTorrent(
            file_stats=season_files if file_stats is None else file_stats,
            state=state,
        )

    return _make
