"""CID adapter — implements the identifier contract on top of ``multiformats``.

Nothing outside this module imports ``multiformats``; codecs receive a
:class:`~atdata.domain.identifier.IdentifierParser` instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from multiformats import CID, varint

from atdata.domain.errors import InvalidIdentifierError

logger = logging.getLogger(__name__)

# multiformats and its base-encoding backend report bad input through several
# unrelated exception families; all of them mean "not a CID".
_PARSE_ERRORS = (Exception,)


@dataclass(frozen=True)
class MultiformatsIdentifier:
    """A parsed CID. Always defined; undefined links hold no identifier at all."""

    cid: CID

    def canonical_string(self) -> str:
        # CIDv0 only has a base58btc form; CIDv1 is canonically lowercase base32.
        if self.cid.version == 0:
            return self.cid.encode("base58btc")
        return self.cid.encode("base32")

    def to_bytes(self) -> bytes:
        return bytes(self.cid)

    def is_defined(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.canonical_string()


def _check_multihash(cid: CID) -> None:
    """Reject CIDs whose multihash digest length disagrees with its header."""
    try:
        _code, _, rest = varint.decode_raw(cid.digest)
        size, _, digest = varint.decode_raw(rest)
    except _PARSE_ERRORS as exc:
        raise InvalidIdentifierError(f"malformed multihash: {exc}") from exc
    if len(digest) != size:
        raise InvalidIdentifierError(
            f"multihash declares {size} digest bytes but carries {len(digest)}"
        )


class MultiformatsParser:
    """Parses CIDs from strings and bytes."""

    def parse(self, text: str) -> MultiformatsIdentifier:
        if not text:
            raise InvalidIdentifierError("empty CID string")
        try:
            cid = CID.decode(text)
        except _PARSE_ERRORS as exc:
            logger.debug("rejected_cid", extra={"cid": text}, exc_info=True)
            raise InvalidIdentifierError(f"invalid CID {text!r}: {exc}") from exc
        _check_multihash(cid)
        return MultiformatsIdentifier(cid)

    def from_bytes(self, data: bytes) -> MultiformatsIdentifier:
        if not data:
            raise InvalidIdentifierError("empty CID bytes")
        try:
            cid = CID.decode(bytes(data))
        except _PARSE_ERRORS as exc:
            logger.debug("rejected_cid", extra={"cid_hex": data.hex()}, exc_info=True)
            raise InvalidIdentifierError(f"invalid binary CID: {exc}") from exc
        _check_multihash(cid)
        return MultiformatsIdentifier(cid)


default_parser = MultiformatsParser()
