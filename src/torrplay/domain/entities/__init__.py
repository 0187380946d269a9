from .errors import (
    IndexNotResolvedError,
    InvalidIndexError,
    LinkParseError,
    MetadataNotReadyError,
    NoSuitableFileError,
    PlayError,
    PlayInputError,
    TorrentRegistrationError,
    TorrentUnavailableError,
    UnauthorizedError,
)
from .torrent import (
    AUTO_SELECT_INDEX,
    CandidateFile,
    PlayRequest,
    SelectionHints,
    TorrentSpec,
    TorrentState,
    TorrentStatus,
)

__all__ = [
    "AUTO_SELECT_INDEX",
    "CandidateFile",
    "IndexNotResolvedError",
    "InvalidIndexError",
    "LinkParseError",
    "MetadataNotReadyError",
    "NoSuitableFileError",
    "PlayError",
    "PlayInputError",
    "PlayRequest",
    "SelectionHints",
    "TorrentRegistrationError",
    "TorrentSpec",
    "TorrentState",
    "TorrentStatus",
    "TorrentUnavailableError",
    "UnauthorizedError",
]
