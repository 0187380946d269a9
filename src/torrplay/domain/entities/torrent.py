"""Domain entities for torrent playback.

Pure value objects, no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from urllib.parse import quote

# Reserved ``{id}`` value on the play route: pick the file automatically.
AUTO_SELECT_INDEX = -10


class TorrentState(IntEnum):
    """Engine lifecycle states (values match the engine's ``stat`` field)."""

    ADDED = 0
    GETTING_INFO = 1
    PRELOAD = 2
    WORKING = 3
    CLOSED = 4
    IN_DB = 5


@dataclass(frozen=True)
class CandidateFile:
    """One file entry inside a torrent."""

    id: int
    path: str  # Relative, torrent-internal (e.g. "Show/S01/Show.S01E05.mkv")
    length: int = 0  # Size in bytes


@dataclass(frozen=True)
class SelectionHints:
    """Optional hints for auto-selection.

    Priority: filename > season+episode > none (largest video).
    """

    filename: str | None = None
    season: str | None = None
    episode: str | None = None


@dataclass(frozen=True)
class TorrentSpec:
    """Parsed torrent link."""

    info_hash: str  # 40-char lowercase hex
    display_name: str = ""
    trackers: tuple[str, ...] = ()

    def to_magnet(self) -> str:
        """Render the spec back into a magnet URI."""
        parts = [f"xt=urn:btih:{self.info_hash}"]
        if self.display_name:
            parts.append(f"dn={quote(self.display_name)}")
        parts.extend(f"tr={quote(tr, safe='')}" for tr in self.trackers)
        return "magnet:?" + "&".join(parts)


@dataclass(frozen=True)
class TorrentStatus:
    """Snapshot of a torrent as reported by the engine."""

    info_hash: str
    state: TorrentState = TorrentState.ADDED
    title: str = ""
    poster: str = ""
    data: str = ""
    category: str = ""
    file_stats: tuple[CandidateFile, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlayRequest:
    """Parsed ``/play/{hash}/{id}`` request."""

    link: str
    index: str  # Raw token: integer literal or AUTO_SELECT_INDEX
    hints: SelectionHints = field(default_factory=SelectionHints)
    auth_required: bool = False
    auth_user: str | None = None
