"""Play request errors.

Every failure is terminal for the current request. Each error class carries
the HTTP status it maps to, so the router can translate it without a lookup
table.
"""

from __future__ import annotations


class PlayError(Exception):
    """Base error for the play use case."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class PlayInputError(PlayError):
    """Hash or index token missing."""

    status_code = 404


class LinkParseError(PlayError):
    """Hash/link could not be decoded into a torrent spec."""


class TorrentUnavailableError(PlayError):
    """Engine has no handle for the torrent, or the engine is unreachable."""


class TorrentRegistrationError(PlayError):
    """Re-activating a stored torrent failed."""


class UnauthorizedError(PlayError):
    status_code = 401


class MetadataNotReadyError(PlayError):
    """Torrent has not received its file list yet."""


class IndexNotResolvedError(PlayError):
    """No file index could be determined."""


class NoSuitableFileError(IndexNotResolvedError):
    status_code = 404


class InvalidIndexError(IndexNotResolvedError):
    status_code = 400
