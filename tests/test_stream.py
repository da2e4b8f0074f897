"""Tests for line iteration and payload encoding."""

from __future__ import annotations

from io import BytesIO

import pytest

from iofs.fs.stream import Lines, encode_payload, strip_line_end


class TestStripLineEnd:
    """Tests for strip_line_end function."""

    @pytest.mark.parametrize(
        ("buf", "expected"),
        [(b"a\r\n", b"a"), (b"a\n", b"a"), (b"a", b"a"), (b"a\r", b"a\r")],
    )
    def test_newline(self, buf: bytes, expected: bytes) -> None:
        assert strip_line_end(buf) == expected

    def test_custom_delimiter_keeps_cr(self) -> None:
        assert strip_line_end(b"a\r,", b",") == b"a\r"


class TestEncodePayload:
    """Tests for encode_payload function."""

    def test_bytes_and_text(self) -> None:
        assert encode_payload(bytearray(b"\x00\x01")) == b"\x00\x01"
        assert encode_payload("héllo") == "héllo".encode()

    def test_other_values(self) -> None:
        assert encode_payload(42) == b"42"
        assert encode_payload(1.5) == b"1.5"


class TestLines:
    """Tests for the Lines iterator."""

    def test_closes_when_exhausted(self) -> None:
        reader = BytesIO(b"one\r\ntwo\n")
        assert list(Lines(reader)) == ["one", "two"]
        assert reader.closed

    def test_closes_on_bad_utf8(self) -> None:
        """Test the reader is released when a line is not valid UTF-8."""
        reader = BytesIO(b"ok\n\xff\xfe\n")
        lines = Lines(reader)
        assert next(lines) == "ok"
        with pytest.raises(UnicodeDecodeError):
            next(lines)
        assert reader.closed

    def test_context_manager_closes(self) -> None:
        reader = BytesIO(b"one\n")
        with Lines(reader) as lines:
            assert next(lines) == "one"
        assert reader.closed
