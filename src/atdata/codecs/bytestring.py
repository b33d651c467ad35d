"""The ``bytes`` scalar and its JSON/CBOR codec.

JSON form is ``{"$bytes": "<unpadded std base64>"}``; CBOR form is a plain
byte string. Absence is ``None`` at the call site:

- ``None`` → CBOR ``null`` (``0xf6``); refused by the JSON encoder.
- ``ByteString(b"")`` → empty byte string (``0x40``) / ``{"$bytes":""}``.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO

from atdata.domain.envelope import BYTES_MARKER, TaggedEnvelope, UnpaddedBase64
from atdata.domain.errors import DecodeError, NilValueError
from atdata.infrastructure import cbor

logger = logging.getLogger(__name__)

_ENVELOPE: TaggedEnvelope[bytes] = TaggedEnvelope(BYTES_MARKER, UnpaddedBase64())


@dataclass(frozen=True)
class ByteString:
    """An immutable octet sequence. Equality is exact byte equality."""

    data: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            msg = f"ByteString wraps bytes, got {type(self.data).__name__}"
            raise TypeError(msg)
        object.__setattr__(self, "data", bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def to_json(self) -> str:
        return encode_text(self)

    def to_json_object(self) -> dict[str, str]:
        return _ENVELOPE.to_object(self.data)

    def to_cbor(self) -> bytes:
        return dumps_binary(self)


def encode_text(value: ByteString | None) -> str:
    """Serialize to ``{"$bytes":"..."}``.

    Raises:
        NilValueError: *value* is None; absence has no JSON form here.
    """
    if value is None:
        raise NilValueError("cannot encode absent $bytes as JSON")
    return _ENVELOPE.dumps(value.data)


def decode_text(text: str | bytes) -> ByteString:
    """Parse a ``$bytes`` envelope.

    Raises:
        DecodeError: Malformed JSON, missing/non-string marker, or bad base64.
    """
    return ByteString(_ENVELOPE.loads(text))


def from_json_object(obj: Any) -> ByteString:
    """Decode an envelope that is already a parsed dict."""
    return ByteString(_ENVELOPE.from_object(obj))


def encode_binary(value: ByteString | None, writer: BinaryIO) -> None:
    """Write one CBOR item: a byte string, or ``null`` when *value* is None."""
    if value is None:
        cbor.write_null(writer)
        return
    cbor.encode(value.data, writer)


def _from_item(item: Any) -> ByteString | None:
    if item is None:
        return None
    if isinstance(item, bytes):
        return ByteString(item)
    logger.debug(
        "unexpected_cbor_item",
        extra={"marker": BYTES_MARKER, "item_type": type(item).__name__},
    )
    raise DecodeError(f"expected CBOR byte string, got {type(item).__name__}")


def decode_binary(reader: BinaryIO) -> ByteString | None:
    """Read one CBOR item; ``null`` decodes to None.

    Raises:
        DecodeError: Truncated or malformed CBOR, or an item that is not a byte string.
    """
    return _from_item(cbor.decode(reader))


def dumps_binary(value: ByteString | None) -> bytes:
    buf = io.BytesIO()
    encode_binary(value, buf)
    return buf.getvalue()


def loads_binary(data: bytes) -> ByteString | None:
    """Decode a buffer holding exactly one item; trailing bytes are an error."""
    return _from_item(cbor.loads(data))
