"""Tests for the tagged JSON envelope and unpadded base64 payload codec."""

from __future__ import annotations

import json

import pytest

from atdata.domain.envelope import (
    BYTES_MARKER,
    LINK_MARKER,
    TaggedEnvelope,
    UnpaddedBase64,
)
from atdata.domain.errors import DecodeError


class _Upper:
    """Toy payload codec used to exercise the envelope on its own."""

    def encode(self, value: str) -> str:
        return value.upper()

    def decode(self, payload: str) -> str:
        return payload.lower()


@pytest.fixture
def envelope() -> TaggedEnvelope[str]:
    return TaggedEnvelope("$test", _Upper())


class TestTaggedEnvelope:
    def test_dumps_is_compact(self, envelope: TaggedEnvelope[str]) -> None:
        assert envelope.dumps("abc") == '{"$test":"ABC"}'

    def test_to_object(self, envelope: TaggedEnvelope[str]) -> None:
        assert envelope.to_object("abc") == {"$test": "ABC"}

    def test_loads(self, envelope: TaggedEnvelope[str]) -> None:
        assert envelope.loads('{"$test": "ABC"}') == "abc"

    def test_loads_accepts_bytes(self, envelope: TaggedEnvelope[str]) -> None:
        assert envelope.loads(b'{"$test":"XY"}') == "xy"

    def test_extra_keys_ignored(self, envelope: TaggedEnvelope[str]) -> None:
        assert envelope.loads('{"$test":"A","other":1}') == "a"

    def test_from_object(self, envelope: TaggedEnvelope[str]) -> None:
        assert envelope.from_object(json.loads('{"$test":"Q"}')) == "q"

    @pytest.mark.parametrize(
        "text",
        [
            '{$test: "ABC"}',  # unquoted key
            '{"$test": "ABC"',  # unterminated
            "",
            "not json",
        ],
    )
    def test_malformed_json(self, envelope: TaggedEnvelope[str], text: str) -> None:
        with pytest.raises(DecodeError, match="malformed"):
            envelope.loads(text)

    @pytest.mark.parametrize(
        "text",
        [
            "[" * 200_000,
            '{"$test":' + "[" * 100_000 + "]" * 100_000 + "}",
        ],
    )
    def test_deep_nesting_rejected(self, envelope: TaggedEnvelope[str], text: str) -> None:
        with pytest.raises(DecodeError, match="malformed"):
            envelope.loads(text)

    def test_missing_marker(self, envelope: TaggedEnvelope[str]) -> None:
        with pytest.raises(DecodeError, match="missing"):
            envelope.loads('{"$other":"ABC"}')

    @pytest.mark.parametrize("payload", ["1", "null", "true", '["ABC"]', '{"a":"b"}'])
    def test_non_string_marker(self, envelope: TaggedEnvelope[str], payload: str) -> None:
        with pytest.raises(DecodeError, match="must be a string"):
            envelope.loads('{"$test":' + payload + "}")

    @pytest.mark.parametrize("text", ['"ABC"', "[]", "42", "null"])
    def test_non_object_document(self, envelope: TaggedEnvelope[str], text: str) -> None:
        with pytest.raises(DecodeError, match="expected a JSON object"):
            envelope.loads(text)


class TestMarkers:
    def test_marker_values(self) -> None:
        assert BYTES_MARKER == "$bytes"
        assert LINK_MARKER == "$link"


class TestUnpaddedBase64:
    codec = UnpaddedBase64()

    @pytest.mark.parametrize(
        "raw,encoded",
        [
            (b"", ""),
            (b"h", "aA"),
            (b"hi", "aGk"),
            (b"hi!", "aGkh"),
            (b"test data", "dGVzdCBkYXRh"),
            (b"\xfb\xff", "+/8"),
        ],
    )
    def test_encode_strips_padding(self, raw: bytes, encoded: str) -> None:
        assert self.codec.encode(raw) == encoded

    @pytest.mark.parametrize(
        "encoded,raw",
        [
            ("", b""),
            ("aA", b"h"),
            ("aGk", b"hi"),
            ("dGVzdCBkYXRh", b"test data"),
            ("+/8", b"\xfb\xff"),
        ],
    )
    def test_decode(self, encoded: str, raw: bytes) -> None:
        assert self.codec.decode(encoded) == raw

    def test_rejects_padding(self) -> None:
        with pytest.raises(DecodeError, match="padded"):
            self.codec.decode("aGk=")

    def test_rejects_bad_length(self) -> None:
        with pytest.raises(DecodeError, match="length"):
            self.codec.decode("aGkhx")

    @pytest.mark.parametrize("payload", ["aG!k", "-_8", "aG k", "dGVzdé"])
    def test_rejects_foreign_alphabet(self, payload: str) -> None:
        with pytest.raises(DecodeError):
            self.codec.decode(payload)
