"""Tests for the $bytes scalar and its codec."""

from __future__ import annotations

import io

import pytest

from atdata.codecs import bytestring
from atdata.codecs.bytestring import ByteString
from atdata.domain.errors import DecodeError, NilValueError

TEST_BYTES_STRING = b"test data"
TEST_BYTES_JSON = '{"$bytes":"dGVzdCBkYXRh"}'

PAYLOADS = [b"", b"\x00", b"test data", bytes(range(256)), b"\xff" * 1000]


class TestByteString:
    def test_equality_is_byte_equality(self) -> None:
        assert ByteString(b"abc") == ByteString(b"abc")
        assert ByteString(b"abc") != ByteString(b"abd")

    def test_hashable(self) -> None:
        assert len({ByteString(b"a"), ByteString(b"a"), ByteString(b"b")}) == 2

    def test_accepts_bytearray_and_memoryview(self) -> None:
        assert ByteString(bytearray(b"ab")).data == b"ab"
        assert ByteString(memoryview(b"ab")).data == b"ab"
        assert type(ByteString(bytearray(b"ab")).data) is bytes

    def test_rejects_non_bytes(self) -> None:
        with pytest.raises(TypeError):
            ByteString("text")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            ByteString(None)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        value = ByteString(b"a")
        with pytest.raises(AttributeError):
            value.data = b"b"  # type: ignore[misc]

    def test_bytes_and_len(self) -> None:
        value = ByteString(TEST_BYTES_STRING)
        assert bytes(value) == TEST_BYTES_STRING
        assert len(value) == 9

    def test_empty_is_default(self) -> None:
        assert ByteString() == ByteString(b"")


class TestText:
    def test_encode(self) -> None:
        assert bytestring.encode_text(ByteString(TEST_BYTES_STRING)) == TEST_BYTES_JSON

    def test_encode_method(self) -> None:
        assert ByteString(TEST_BYTES_STRING).to_json() == TEST_BYTES_JSON

    def test_to_json_object(self) -> None:
        assert ByteString(TEST_BYTES_STRING).to_json_object() == {"$bytes": "dGVzdCBkYXRh"}

    def test_decode(self) -> None:
        assert bytestring.decode_text(TEST_BYTES_JSON) == ByteString(TEST_BYTES_STRING)

    def test_decode_with_whitespace(self) -> None:
        assert bytestring.decode_text('{ "$bytes" : "dGVzdCBkYXRh" }').data == TEST_BYTES_STRING

    def test_from_json_object(self) -> None:
        assert bytestring.from_json_object({"$bytes": "aGk"}) == ByteString(b"hi")

    def test_encode_absent_fails(self) -> None:
        with pytest.raises(NilValueError):
            bytestring.encode_text(None)

    def test_empty_is_not_absent(self) -> None:
        assert bytestring.encode_text(ByteString(b"")) == '{"$bytes":""}'
        assert bytestring.decode_text('{"$bytes":""}') == ByteString(b"")

    @pytest.mark.parametrize("payload", PAYLOADS)
    def test_round_trip(self, payload: bytes) -> None:
        value = ByteString(payload)
        assert bytestring.decode_text(bytestring.encode_text(value)) == value

    @pytest.mark.parametrize(
        "text",
        [
            "{$bytes: 1}",
            '{"$link":"dGVzdCBkYXRh"}',
            '{"$bytes":5}',
            '{"$bytes":null}',
            '{"$bytes":"dGVzdCBkYXRh=="}',
            '{"$bytes":"dGVzd"}',
            '{"$bytes":"dGVz!CBkYXRh"}',
            '"dGVzdCBkYXRh"',
        ],
    )
    def test_decode_rejects(self, text: str) -> None:
        with pytest.raises(DecodeError):
            bytestring.decode_text(text)


    def test_decode_deeply_nested_rejected(self) -> None:
        with pytest.raises(DecodeError):
            bytestring.decode_text("[" * 200_000)
        with pytest.raises(DecodeError):
            bytestring.decode_text('{"$bytes":' + "[" * 100_000 + "]" * 100_000 + "}")


class TestBinary:
    def test_encode(self) -> None:
        buf = io.BytesIO()
        bytestring.encode_binary(ByteString(TEST_BYTES_STRING), buf)
        assert buf.getvalue() == b"\x49" + TEST_BYTES_STRING

    def test_encode_absent_writes_null(self) -> None:
        buf = io.BytesIO()
        bytestring.encode_binary(None, buf)
        assert buf.getvalue() == b"\xf6"

    def test_encode_empty(self) -> None:
        assert bytestring.dumps_binary(ByteString(b"")) == b"\x40"

    def test_to_cbor_method(self) -> None:
        assert ByteString(b"ab").to_cbor() == b"\x42ab"

    def test_decode_null_is_absent(self) -> None:
        assert bytestring.decode_binary(io.BytesIO(b"\xf6")) is None

    def test_decode_empty_is_present(self) -> None:
        assert bytestring.decode_binary(io.BytesIO(b"\x40")) == ByteString(b"")

    @pytest.mark.parametrize("payload", PAYLOADS)
    def test_round_trip(self, payload: bytes) -> None:
        buf = io.BytesIO()
        bytestring.encode_binary(ByteString(payload), buf)
        buf.seek(0)
        assert bytestring.decode_binary(buf) == ByteString(payload)

    def test_stream_of_values(self) -> None:
        buf = io.BytesIO()
        for value in (ByteString(b"a"), None, ByteString(b"")):
            bytestring.encode_binary(value, buf)
        buf.seek(0)
        assert bytestring.decode_binary(buf) == ByteString(b"a")
        assert bytestring.decode_binary(buf) is None
        assert bytestring.decode_binary(buf) == ByteString(b"")

    def test_indefinite_length_input_accepted(self) -> None:
        assert bytestring.loads_binary(b"\x5f\x41a\x41b\xff") == ByteString(b"ab")

    @pytest.mark.parametrize(
        "data",
        [
            b"",  # empty stream
            b"\x49test",  # truncated
            b"\x63abc",  # text string
            b"\x01",  # integer
            b"\xf7",  # undefined
            b"\x80",  # array
        ],
    )
    def test_decode_rejects(self, data: bytes) -> None:
        with pytest.raises(DecodeError):
            bytestring.decode_binary(io.BytesIO(data))

    def test_loads_rejects_trailing(self) -> None:
        with pytest.raises(DecodeError):
            bytestring.loads_binary(b"\x41a\x41b")
