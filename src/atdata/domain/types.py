"""Wire-format and display enums shared by config, services, and the CLI."""

from __future__ import annotations

from enum import StrEnum


class WireFormat(StrEnum):
    """The two serializations every scalar supports."""

    TEXT = "text"  # JSON envelope
    BINARY = "binary"  # CBOR


class BinaryDisplay(StrEnum):
    """How CBOR bytes are written to and read from the command line."""

    HEX = "hex"
    BASE64 = "base64"


class PayloadInput(StrEnum):
    """How a raw ``bytes`` payload argument is interpreted."""

    UTF8 = "utf8"
    HEX = "hex"
    BASE64 = "base64"
