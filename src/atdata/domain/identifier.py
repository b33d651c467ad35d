"""Identifier contract — the narrow seam to the CID library.

Codecs only ever see these protocols. The concrete implementation lives in
:mod:`atdata.infrastructure.cid`; swapping the CID library means writing a
new adapter, not touching codec code.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Identifier(Protocol):
    """A parsed content identifier."""

    def canonical_string(self) -> str:
        """Canonical multibase string form (e.g. ``bafyrei...``)."""
        ...

    def to_bytes(self) -> bytes:
        """Canonical binary form (version + codec + multihash)."""
        ...

    def is_defined(self) -> bool: ...


class IdentifierParser(Protocol):
    """Parses identifiers from their string or binary form.

    Both methods raise :class:`~atdata.domain.errors.InvalidIdentifierError`
    on malformed input.
    """

    def parse(self, text: str) -> Identifier: ...

    def from_bytes(self, data: bytes) -> Identifier: ...
