"""Shared service-layer helpers for moving bytes through text channels."""

from __future__ import annotations

import base64
import binascii

from atdata.domain.errors import DecodeError
from atdata.domain.types import BinaryDisplay, PayloadInput


def render_binary(data: bytes, display: BinaryDisplay) -> str:
    """Render CBOR bytes for display."""
    if display is BinaryDisplay.BASE64:
        return base64.b64encode(data).decode("ascii")
    return data.hex()


def parse_binary(text: str, display: BinaryDisplay) -> bytes:
    """Inverse of :func:`render_binary`. Whitespace is ignored.

    Raises:
        DecodeError: *text* is not valid in the chosen display encoding.
    """
    compact = "".join(text.split())
    try:
        if display is BinaryDisplay.BASE64:
            return base64.b64decode(compact, validate=True)
        return bytes.fromhex(compact)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"input is not valid {display.value}: {exc}") from exc


def parse_payload(text: str, encoding: PayloadInput) -> bytes:
    """Turn a command-line payload argument into raw bytes.

    Raises:
        DecodeError: *text* is not valid hex/base64 for the chosen encoding.
    """
    if encoding is PayloadInput.UTF8:
        return text.encode("utf-8")
    return parse_binary(text, BinaryDisplay(encoding.value))


def try_utf8(data: bytes) -> str | None:
    """Decode *data* as UTF-8 if possible, for friendlier display."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None
