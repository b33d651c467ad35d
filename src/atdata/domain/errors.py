"""Codec error taxonomy.

Every error carries a stable ``code`` so the service layer can build a
:class:`~atdata.services.result.ServiceError` without inspecting messages.

INVARIANT: Codecs raise, they never substitute defaults or return partial values.
"""

from __future__ import annotations


class AtDataError(Exception):
    """Base class for all errors raised by atdata codecs."""

    code = "ATDATA_ERROR"


class NilValueError(AtDataError):
    """An absent value was handed to an encoder that has no form for absence."""

    code = "NIL_VALUE"


class UndefinedLinkError(AtDataError):
    """A cid-link holding no parsed identifier was asked to serialize itself."""

    code = "UNDEFINED_LINK"


class DecodeError(AtDataError):
    """Malformed envelope, bad base64, or truncated/malformed CBOR."""

    code = "DECODE_FAILED"


class InvalidIdentifierError(AtDataError):
    """The identifier parser rejected a CID string or CID bytes."""

    code = "INVALID_IDENTIFIER"
