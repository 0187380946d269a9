from .link_parser import LinkParserPort
from .torrent_manager import TorrentHandle, TorrentManagerPort

__all__ = [
    "LinkParserPort",
    "TorrentHandle",
    "TorrentManagerPort",
]
