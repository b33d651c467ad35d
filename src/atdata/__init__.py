"""atdata — bytes and cid-link scalars for the AT Protocol data model."""

from __future__ import annotations

from atdata.codecs.bytestring import ByteString
from atdata.codecs.cidlink import CIDLink
from atdata.domain.errors import (
    AtDataError,
    DecodeError,
    InvalidIdentifierError,
    NilValueError,
    UndefinedLinkError,
)

__version__ = "0.1.0"

__all__ = [
    "AtDataError",
    "ByteString",
    "CIDLink",
    "DecodeError",
    "InvalidIdentifierError",
    "NilValueError",
    "UndefinedLinkError",
    "__version__",
]
