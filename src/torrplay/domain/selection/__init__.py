from .file_selector import (
    auto_select,
    select_by_filename,
    select_by_season_episode,
    select_largest_video,
)
from .video import VIDEO_EXTENSIONS, is_video

__all__ = [
    "VIDEO_EXTENSIONS",
    "auto_select",
    "is_video",
    "select_by_filename",
    "select_by_season_episode",
    "select_largest_video",
]
