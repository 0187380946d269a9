"""Port for decoding a hash/magnet link into a torrent spec."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from torrplay.domain.entities.torrent import TorrentSpec


@runtime_checkable
class LinkParserPort(Protocol):
    def parse(self, link: str) -> TorrentSpec:
        """Decode *link* into a TorrentSpec.

        Raises LinkParseError if the link is not a valid torrent identifier.
        """
        ...
