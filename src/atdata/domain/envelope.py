"""Tagged envelope — the JSON form shared by ``$bytes`` and ``$link``.

Both scalars serialize to a single-key object whose key is a well-known
marker and whose value is a string payload::

    {"$bytes": "dGVzdCBkYXRh"}
    {"$link": "bafyrei..."}

:class:`TaggedEnvelope` owns the JSON handling; a :class:`PayloadCodec`
owns the conversion between the in-memory value and the payload string.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from atdata.domain.errors import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

BYTES_MARKER = "$bytes"
LINK_MARKER = "$link"


class PayloadCodec(Protocol[T]):
    """Converts a value to and from the envelope's string payload."""

    def encode(self, value: T) -> str: ...

    def decode(self, payload: str) -> T: ...


@dataclass(frozen=True)
class TaggedEnvelope(Generic[T]):
    """A ``{marker: payload}`` JSON envelope parameterized by a payload codec."""

    marker: str
    codec: PayloadCodec[T]

    def to_object(self, value: T) -> dict[str, str]:
        """Build the envelope as a plain dict, for embedding in a larger document."""
        return {self.marker: self.codec.encode(value)}

    def dumps(self, value: T) -> str:
        """Serialize *value* to compact envelope JSON."""
        return json.dumps(self.to_object(value), separators=(",", ":"))

    def from_object(self, obj: Any) -> T:
        """Extract and decode the payload from an already-parsed envelope.

        Unknown keys next to the marker are ignored.
        """
        if not isinstance(obj, dict):
            raise DecodeError(
                f"expected a JSON object for {self.marker}, got {type(obj).__name__}"
            )
        if self.marker not in obj:
            raise DecodeError(f"envelope is missing the {self.marker!r} key")
        payload = obj[self.marker]
        if not isinstance(payload, str):
            raise DecodeError(
                f"{self.marker} payload must be a string, got {type(payload).__name__}"
            )
        return self.codec.decode(payload)

    def loads(self, text: str | bytes) -> T:
        """Parse envelope JSON and decode its payload."""
        try:
            obj = json.loads(text)
        except (ValueError, RecursionError) as exc:
            # The stdlib parser recurses once per nesting level.
            logger.debug("malformed_envelope", extra={"marker": self.marker}, exc_info=True)
            raise DecodeError(f"malformed {self.marker} envelope: {exc}") from exc
        return self.from_object(obj)


class UnpaddedBase64:
    """Standard-alphabet base64 without ``=`` padding (RFC 4648 section 3.2)."""

    def encode(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii").rstrip("=")

    def decode(self, payload: str) -> bytes:
        if "=" in payload:
            raise DecodeError("base64 payload must not be padded")
        if len(payload) % 4 == 1:
            raise DecodeError(f"invalid base64 length {len(payload)}")
        padded = payload + "=" * (-len(payload) % 4)
        try:
            return base64.b64decode(padded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"invalid base64 payload: {exc}") from exc
