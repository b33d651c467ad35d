"""CBOR primitives — generic encode/decode over caller-supplied streams.

Encoding always uses ``cbor2`` canonical mode: shortest-form heads, sorted
map keys, definite lengths only. This is the deterministic profile the
``$bytes``/``$link`` binary forms rely on.

Streams are never closed, flushed, or retried here. Whatever blocking or
timeout behaviour the stream has is the caller's concern.
"""

from __future__ import annotations

import io
import logging
from typing import Any, BinaryIO

import cbor2

from atdata.domain.errors import DecodeError

logger = logging.getLogger(__name__)

CBOR_NULL = 0xF6
NULL_ITEM = bytes([CBOR_NULL])

# DAG-CBOR link tag; the tagged payload is 0x00 (identity multibase) + CID bytes.
LINK_TAG = 42
LINK_PREFIX = b"\x00"


def encode(value: Any, writer: BinaryIO) -> None:
    """Write *value* as a single canonical CBOR item."""
    cbor2.CBOREncoder(writer, canonical=True).encode(value)


def write_null(writer: BinaryIO) -> None:
    """Write the reserved ``null`` item that stands for an absent value."""
    writer.write(NULL_ITEM)


def decode(reader: BinaryIO) -> Any:
    """Read exactly one CBOR item from *reader*.

    Raises:
        DecodeError: The stream is empty, truncated, or not valid CBOR.
    """
    try:
        return cbor2.CBORDecoder(reader).decode()
    except cbor2.CBORDecodeError as exc:
        logger.debug("cbor_decode_failed", exc_info=True)
        raise DecodeError(f"malformed CBOR: {exc}") from exc


def dumps(value: Any) -> bytes:
    """Encode *value* to a standalone canonical CBOR buffer."""
    buf = io.BytesIO()
    encode(value, buf)
    return buf.getvalue()


def loads(data: bytes) -> Any:
    """Decode a buffer holding exactly one CBOR item.

    Raises:
        DecodeError: The buffer is malformed or has bytes after the item.
    """
    buf = io.BytesIO(data)
    value = decode(buf)
    trailing = len(data) - buf.tell()
    if trailing:
        raise DecodeError(f"{trailing} trailing byte(s) after CBOR item")
    return value


def tag_link(cid_bytes: bytes) -> cbor2.CBORTag:
    """Wrap binary CID bytes in the DAG-CBOR link tag."""
    return cbor2.CBORTag(LINK_TAG, LINK_PREFIX + cid_bytes)


def is_tagged(item: Any) -> bool:
    return isinstance(item, cbor2.CBORTag)


def untag_link(item: cbor2.CBORTag) -> bytes:
    """Return the CID bytes carried by a DAG-CBOR link tag.

    Raises:
        DecodeError: Wrong tag number, non-bytes payload, or missing 0x00 prefix.
    """
    if item.tag != LINK_TAG:
        raise DecodeError(f"unexpected CBOR tag {item.tag}, expected {LINK_TAG}")
    payload = item.value
    if not isinstance(payload, bytes) or not payload.startswith(LINK_PREFIX):
        raise DecodeError("CBOR link tag must carry 0x00-prefixed CID bytes")
    return payload[len(LINK_PREFIX) :]
