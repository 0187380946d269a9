"""Parse info hashes and magnet URIs into TorrentSpec.

Accepted forms:
    - 40-char hex info hash (``c9e15763f722f23e98a29decdfae341b98d53056``)
    - 32-char base32 info hash
    - ``magnet:?xt=urn:btih:<hash>&dn=<name>&tr=<tracker>...``

The info hash is always normalised to lowercase hex.
"""

from __future__ import annotations

import base64
import binascii
import re
from urllib.parse import parse_qs, urlsplit

from torrplay.domain.entities import LinkParseError, TorrentSpec

_HEX_RE = re.compile(r"[0-9a-fA-F]{40}")
_BASE32_RE = re.compile(r"[A-Za-z2-7]{32}")
_BTIH_PREFIX = "urn:btih:"


def normalize_info_hash(value: str) -> str:
    """Return *value* as 40-char lowercase hex.

    Raises LinkParseError for anything that is not a hex or base32 hash.
    """
    value = value.strip()
    if _HEX_RE.fullmatch(value):
        return value.lower()
    if _BASE32_RE.fullmatch(value):
        try:
            return base64.b32decode(value.upper()).hex()
        except binascii.Error as e:
            raise LinkParseError(f"invalid base32 info hash: {value}") from e
    raise LinkParseError(f"invalid info hash: {value}")


def _parse_magnet(link: str) -> TorrentSpec:
    query = parse_qs(urlsplit(link).query)

    info_hash: str | None = None
    for xt in query.get("xt", []):
        if xt.lower().startswith(_BTIH_PREFIX):
            info_hash = normalize_info_hash(xt[len(_BTIH_PREFIX) :])
            break
    if info_hash is None:
        raise LinkParseError("magnet link has no btih info hash")

    display_name = query.get("dn", [""])[0]
    trackers = tuple(query.get("tr", []))
    return TorrentSpec(
        info_hash=info_hash, display_name=display_name, trackers=trackers
    )


class MagnetLinkParser:
    """LinkParserPort implementation for hashes and magnet URIs."""

    def parse(self, link: str) -> TorrentSpec:
        link = link.strip()
        if not link:
            raise LinkParseError("empty link")

        if link.lower().startswith("magnet:"):
            return _parse_magnet(link)

        return TorrentSpec(info_hash=normalize_info_hash(link))
