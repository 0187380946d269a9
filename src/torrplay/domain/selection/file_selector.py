"""Automatic file selection inside a multi-file torrent.

Pure functions over a candidate list, no I/O. Absence of a match is ``None``,
never an exception.

Strategy priority (strict, never merged):
    1. filename hint -> exact basename, then substring on video paths
    2. season + episode hints -> five ordered patterns, largest match wins
    3. no hints -> largest video file
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from torrplay.domain.entities.torrent import CandidateFile, SelectionHints
from torrplay.domain.selection.video import basename, is_video


def _largest(files: Iterable[CandidateFile]) -> CandidateFile | None:
    """Largest file by length; ties keep the first one seen."""
    best: CandidateFile | None = None
    for f in files:
        if best is None or f.length > best.length:
            best = f
    return best


def _pad(value: str) -> str:
    # Only single characters are padded: "1" -> "01", "10" stays "10".
    return "0" + value if len(value) == 1 else value


def season_episode_patterns(season: str, episode: str) -> list[str]:
    """Build the ordered season/episode patterns.

    Hint values are inserted as escaped literals.
    """
    ps, pe = re.escape(_pad(season)), re.escape(_pad(episode))
    season, episode = re.escape(season), re.escape(episode)
    return [
        rf"[Ss]{ps}[Ee]{pe}",  # S01E05
        rf"[Ss]{ps}\.?[Ee]{pe}",  # S01.E05
        rf"{season}x{pe}",  # 1x05
        rf"{ps}x{pe}",  # 01x05
        rf"[Ss]eason[.\s]?{season}.*[Ee]pisode[.\s]?{episode}",  # Season 1 Episode 5
    ]


def select_by_filename(
    candidates: Sequence[CandidateFile], filename: str
) -> int | None:
    """Resolve a file id from a filename hint (case-insensitive).

    An exact basename match wins for any file type. Otherwise the first video
    whose full path contains the hint is returned.
    """
    needle = filename.lower()

    for f in candidates:
        if basename(f.path).lower() == needle:
            return f.id

    for f in candidates:
        if needle in f.path.lower() and is_video(f.path):
            return f.id

    return None


def select_by_season_episode(
    candidates: Sequence[CandidateFile], season: str, episode: str
) -> int | None:
    """Resolve a file id from season/episode hints.

    The first pattern with any video match wins; among its matches the
    largest file is returned.
    """
    videos = [f for f in candidates if is_video(f.path)]

    for pattern in season_episode_patterns(season, episode):
        regex = re.compile(pattern)
        best = _largest(f for f in videos if regex.search(f.path))
        if best is not None:
            return best.id

    return None


def select_largest_video(candidates: Sequence[CandidateFile]) -> int | None:
    """Id of the largest video file, or None if there is no video."""
    best = _largest(f for f in candidates if is_video(f.path))
    return best.id if best is not None else None


def auto_select(
    candidates: Sequence[CandidateFile], hints: SelectionHints
) -> int | None:
    """Pick a file id using the highest-priority hint that is set."""
    if not candidates:
        return None

    if hints.filename:
        return select_by_filename(candidates, hints.filename)

    if hints.season and hints.episode:
        return select_by_season_episode(candidates, hints.season, hints.episode)

    return select_largest_video(candidates)
