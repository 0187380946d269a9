"""Video container detection by file extension."""

from __future__ import annotations

VIDEO_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".mp4",
        ".mkv",
        ".avi",
        ".mov",
        ".wmv",
        ".flv",
        ".webm",
        ".m4v",
        ".mpg",
        ".mpeg",
        ".3gp",
        ".ogv",
        ".ts",
        ".m2ts",
    }
)


def basename(path: str) -> str:
    """Final segment of a torrent-internal path."""
    return path.rstrip("/").rsplit("/", 1)[-1]


def extension(path: str) -> str:
    """Lowercased extension including the dot, or ``""``.

    Everything from the last dot of the final segment counts, so a bare
    ``.mkv`` has the extension ``.mkv``.
    """
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:].lower() if dot >= 0 else ""


def is_video(path: str) -> bool:
    """True if *path* has a known video container extension (case-insensitive)."""
    return extension(path) in VIDEO_EXTENSIONS
