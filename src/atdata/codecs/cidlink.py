"""The ``cid-link`` scalar and its JSON/CBOR codec.

A :class:`CIDLink` is either *undefined* (``CIDLink()``, holding no
identifier) or *defined* (holding a parsed CID). Only defined links
serialize. Absence of the link itself is ``None`` at the call site and
maps to CBOR ``null``.

JSON form is ``{"$link": "<canonical CID string>"}``. CBOR form is a byte
string holding the binary CID, or with ``tagged=True`` the DAG-CBOR tag 42
form. Both CBOR forms are accepted on decode.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO

from atdata.domain.envelope import LINK_MARKER, TaggedEnvelope
from atdata.domain.errors import DecodeError, NilValueError, UndefinedLinkError
from atdata.domain.identifier import Identifier, IdentifierParser
from atdata.infrastructure import cbor
from atdata.infrastructure.cid import default_parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _LinkPayload:
    parser: IdentifierParser

    def encode(self, value: Identifier) -> str:
        return value.canonical_string()

    def decode(self, payload: str) -> Identifier:
        return self.parser.parse(payload)


def _envelope(parser: IdentifierParser) -> TaggedEnvelope[Identifier]:
    return TaggedEnvelope(LINK_MARKER, _LinkPayload(parser))


@dataclass(frozen=True)
class CIDLink:
    """A link to content by CID.

    INVARIANT: ``identifier`` is either None (undefined) or a defined identifier.
    """

    identifier: Identifier | None = None

    def __post_init__(self) -> None:
        if self.identifier is not None and not isinstance(self.identifier, Identifier):
            msg = (
                f"CIDLink wraps a parsed identifier, got {type(self.identifier).__name__}; "
                "use CIDLink.parse() for strings"
            )
            raise TypeError(msg)

    @classmethod
    def parse(cls, text: str, *, parser: IdentifierParser = default_parser) -> CIDLink:
        """Build a defined link from a CID string.

        Raises:
            InvalidIdentifierError: *text* is not a valid CID.
        """
        return cls(parser.parse(text))

    def is_defined(self) -> bool:
        return self.identifier is not None and self.identifier.is_defined()

    def to_canonical_string(self) -> str:
        return _require_identifier(self).canonical_string()

    def __str__(self) -> str:
        return self.to_canonical_string()

    def to_json(self) -> str:
        return encode_text(self)

    def to_json_object(self) -> dict[str, str]:
        return _envelope(default_parser).to_object(_require_identifier(self))

    def to_cbor(self, *, tagged: bool = False) -> bytes:
        return dumps_binary(self, tagged=tagged)


def _require_identifier(link: CIDLink) -> Identifier:
    if link.identifier is None or not link.identifier.is_defined():
        raise UndefinedLinkError("cid-link is undefined")
    return link.identifier


def to_canonical_string(link: CIDLink) -> str:
    """Canonical CID string of a defined link.

    Raises:
        UndefinedLinkError: *link* holds no identifier.
    """
    return link.to_canonical_string()


def encode_text(link: CIDLink | None) -> str:
    """Serialize to ``{"$link":"..."}``.

    Raises:
        NilValueError: *link* is None.
        UndefinedLinkError: *link* holds no identifier.
    """
    if link is None:
        raise NilValueError("cannot encode absent $link as JSON")
    return _envelope(default_parser).dumps(_require_identifier(link))


def decode_text(text: str | bytes, *, parser: IdentifierParser = default_parser) -> CIDLink:
    """Parse a ``$link`` envelope into a defined link.

    Raises:
        DecodeError: Malformed JSON, or missing/non-string marker.
        InvalidIdentifierError: The marker value is not a valid CID.
    """
    return CIDLink(_envelope(parser).loads(text))


def from_json_object(obj: Any, *, parser: IdentifierParser = default_parser) -> CIDLink:
    """Decode an envelope that is already a parsed dict."""
    return CIDLink(_envelope(parser).from_object(obj))


def encode_binary(link: CIDLink | None, writer: BinaryIO, *, tagged: bool = False) -> None:
    """Write one CBOR item for *link*.

    None writes ``null``. There is no empty CID, so an undefined link is an
    error rather than an empty byte string.

    Raises:
        UndefinedLinkError: *link* is present but holds no identifier.
    """
    if link is None:
        cbor.write_null(writer)
        return
    raw = _require_identifier(link).to_bytes()
    cbor.encode(cbor.tag_link(raw) if tagged else raw, writer)


def _from_item(item: Any, parser: IdentifierParser) -> CIDLink | None:
    if item is None:
        return None
    if isinstance(item, bytes):
        raw = item
    elif cbor.is_tagged(item):
        raw = cbor.untag_link(item)
    else:
        logger.debug(
            "unexpected_cbor_item",
            extra={"marker": LINK_MARKER, "item_type": type(item).__name__},
        )
        raise DecodeError(f"expected CBOR byte string or tag 42, got {type(item).__name__}")
    return CIDLink(parser.from_bytes(raw))


def decode_binary(
    reader: BinaryIO, *, parser: IdentifierParser = default_parser
) -> CIDLink | None:
    """Read one CBOR item; ``null`` decodes to None, anything else to a defined link.

    Raises:
        DecodeError: Truncated or malformed CBOR, or an unexpected item type.
        InvalidIdentifierError: The byte string is not a valid binary CID.
    """
    return _from_item(cbor.decode(reader), parser)


def dumps_binary(link: CIDLink | None, *, tagged: bool = False) -> bytes:
    buf = io.BytesIO()
    encode_binary(link, buf, tagged=tagged)
    return buf.getvalue()


def loads_binary(
    data: bytes, *, parser: IdentifierParser = default_parser
) -> CIDLink | None:
    """Decode a buffer holding exactly one item; trailing bytes are an error."""
    return _from_item(cbor.loads(data), parser)
