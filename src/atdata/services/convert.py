"""ConvertService — encode and decode scalars for the command line.

Each operation turns command-line strings into codec calls and reports the
outcome as a :class:`ServiceResult`. Codec errors become structured errors
keyed by :attr:`AtDataError.code`; nothing is retried or defaulted.
"""

from __future__ import annotations

import base64
from typing import Any

import structlog
from structlog.contextvars import bound_contextvars

from atdata.codecs import bytestring, cidlink
from atdata.codecs.bytestring import ByteString
from atdata.codecs.cidlink import CIDLink
from atdata.config.models import AtdataConfig
from atdata.domain.errors import AtDataError
from atdata.domain.types import PayloadInput, WireFormat
from atdata.services._helpers import parse_binary, parse_payload, render_binary, try_utf8
from atdata.services.result import ServiceError, ServiceResult

logger = structlog.get_logger(__name__)


class ConvertService:
    """Runs the bytes and cid-link codecs on behalf of the CLI."""

    def __init__(self, config: AtdataConfig | None = None) -> None:
        self._config = config or AtdataConfig()

    # ------------------------------------------------------------------
    # bytes
    # ------------------------------------------------------------------

    @bound_contextvars(op="encode_bytes")
    def encode_bytes(
        self,
        payload: str | None,
        *,
        fmt: WireFormat = WireFormat.TEXT,
        encoding: PayloadInput | None = None,
    ) -> ServiceResult:
        """Encode a payload argument; None means the value is absent."""
        op = "encode_bytes"
        try:
            value = None
            if payload is not None:
                raw = parse_payload(payload, encoding or self._config.display.payload)
                value = ByteString(raw)
            if fmt is WireFormat.TEXT:
                return self._ok(op, {"format": fmt.value, "output": bytestring.encode_text(value)})
            return self._binary_ok(op, bytestring.dumps_binary(value))
        except AtDataError as exc:
            return self._fail(op, exc)

    @bound_contextvars(op="decode_bytes")
    def decode_bytes(self, data: str, *, fmt: WireFormat = WireFormat.TEXT) -> ServiceResult:
        op = "decode_bytes"
        try:
            if fmt is WireFormat.TEXT:
                value = bytestring.decode_text(data)
            else:
                value = bytestring.loads_binary(parse_binary(data, self._config.display.binary))
        except AtDataError as exc:
            return self._fail(op, exc)

        if value is None:
            return self._ok(op, {"format": fmt.value, "absent": True})
        result: dict[str, Any] = {
            "format": fmt.value,
            "absent": False,
            "length": len(value),
            "hex": value.data.hex(),
            "base64": base64.b64encode(value.data).decode("ascii"),
        }
        text = try_utf8(value.data)
        if text is not None:
            result["utf8"] = text
        return self._ok(op, result)

    # ------------------------------------------------------------------
    # cid-link
    # ------------------------------------------------------------------

    @bound_contextvars(op="encode_link")
    def encode_link(
        self,
        cid: str | None,
        *,
        fmt: WireFormat = WireFormat.TEXT,
        tagged: bool | None = None,
    ) -> ServiceResult:
        """Encode a CID string; None means the link is absent.

        An empty string is an undefined link, not an absent one.
        """
        op = "encode_link"
        try:
            link = None
            if cid is not None:
                link = CIDLink.parse(cid) if cid else CIDLink()
            if fmt is WireFormat.TEXT:
                warnings: list[str] = []
                if tagged is not None:
                    warnings.append("tag 42 choice ignored: JSON links are never tagged")
                return self._ok(
                    op,
                    {"format": fmt.value, "output": cidlink.encode_text(link)},
                    warnings=warnings,
                )
            use_tag = self._config.codec.tag_links if tagged is None else tagged
            return self._binary_ok(op, cidlink.dumps_binary(link, tagged=use_tag))
        except AtDataError as exc:
            return self._fail(op, exc)

    @bound_contextvars(op="decode_link")
    def decode_link(self, data: str, *, fmt: WireFormat = WireFormat.TEXT) -> ServiceResult:
        op = "decode_link"
        try:
            if fmt is WireFormat.TEXT:
                link = cidlink.decode_text(data)
            else:
                link = cidlink.loads_binary(parse_binary(data, self._config.display.binary))
        except AtDataError as exc:
            return self._fail(op, exc)

        if link is None:
            return self._ok(op, {"format": fmt.value, "absent": True})
        return self._ok(
            op,
            {
                "format": fmt.value,
                "absent": False,
                "cid": link.to_canonical_string(),
                "cid_hex": link.identifier.to_bytes().hex() if link.identifier else "",
            },
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _binary_ok(self, op: str, data: bytes) -> ServiceResult:
        display = self._config.display.binary
        return self._ok(
            op,
            {
                "format": WireFormat.BINARY.value,
                "output": render_binary(data, display),
                "display": display.value,
                "length": len(data),
            },
        )

    @staticmethod
    def _ok(op: str, data: dict[str, Any], *, warnings: list[str] | None = None) -> ServiceResult:
        logger.debug("codec_ok", format=data.get("format"), warnings=len(warnings or []))
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings or [])

    @staticmethod
    def _fail(op: str, exc: AtDataError) -> ServiceResult:
        logger.debug("codec_failed", code=exc.code, error=str(exc))
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=exc.code,
                message=str(exc),
                detail={"exception": type(exc).__name__},
            ),
        )
