"""EWP wire-format conformance tests.

Verifies the frame contract: round-trip fidelity, length fidelity,
head-only semantics, compression-list ordering, and the error taxonomy
for malformed input.
"""
from __future__ import annotations

import pytest

from ewp.core.errors import (
    EWPError,
    InvalidLength,
    MalformedFrame,
    TruncatedFrame,
)
from ewp.core.types import Request, Response
from ewp.wire.codec import Codec

# ===================================================================
# Round-trip
# ===================================================================

class TestRoundTrip:
    """Decoding an encoded value MUST reproduce it field for field."""

    def test_MUST_roundtrip_requests(self, codec: Codec, request_value: Request) -> None:
        assert codec.decode_request(codec.encode(request_value)) == request_value

    def test_MUST_roundtrip_responses(self, codec: Codec, response_value: Response) -> None:
        assert codec.decode_response(codec.encode(response_value)) == response_value

    def test_MUST_reencode_decoded_frames_unchanged(
        self, codec: Codec, request_value: Request
    ) -> None:
        raw = codec.encode(request_value)
        assert codec.reencode(raw, "request") == raw


# ===================================================================
# Length fidelity
# ===================================================================

class TestLengthFidelity:
    """Encoded lengths MUST equal the actual block sizes."""

    def test_MUST_declare_request_block_lengths(
        self, codec: Codec, request_value: Request
    ) -> None:
        line, _, rest = codec.encode(request_value).partition(b"\n")
        tokens = line.split(b" ")
        assert int(tokens[5]) == len(request_value.headers)
        assert int(tokens[6]) == len(request_value.body or b"")
        assert len(rest) == int(tokens[5]) + int(tokens[6])

    def test_MUST_declare_response_block_lengths(
        self, codec: Codec, response_value: Response
    ) -> None:
        line, _, rest = codec.encode(response_value).partition(b"\n")
        tokens = line.split(b" ")
        assert int(tokens[2]) == len(response_value.headers)
        assert int(tokens[3]) == len(response_value.body)
        assert rest == response_value.headers + response_value.body

    @pytest.mark.parametrize("missing", [1, 2, 5])
    def test_MUST_reject_short_buffers(self, codec: Codec, missing: int) -> None:
        raw = b"ewp 1.0 GET none none 3 2\nabcde"
        with pytest.raises(TruncatedFrame):
            codec.decode_request(raw[:-missing])


# ===================================================================
# Head-only semantics
# ===================================================================

class TestHeadOnly:
    """The H marker MUST make the body absent, never merely empty."""

    def test_MUST_mark_body_absent(self, codec: Codec) -> None:
        req = codec.decode_request(b"ewp 1.0 HEAD none none 5 3 H\nhelloabc")
        assert req.head_only is True
        assert req.body is None

    def test_MUST_keep_zero_length_body_present(self, codec: Codec) -> None:
        req = codec.decode_request(b"ewp 1.0 HEAD none none 5 0\nhello")
        assert req.head_only is False
        assert req.body == b""

    def test_MUST_emit_marker_last(self, codec: Codec) -> None:
        req = Request(protocol="ewp", version="1.0", command="HEAD", head_only=True)
        assert codec.encode(req) == b"ewp 1.0 HEAD none none 0 0 H\n"


# ===================================================================
# Compression list
# ===================================================================

class TestCompressionList:
    """Order and element count MUST survive decoding."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("none", ("none",)),
            ("gzip,br", ("gzip", "br")),
            ("br,gzip", ("br", "gzip")),
            ("gzip,gzip", ("gzip", "gzip")),
            (",", ("", "")),
            ("", ("",)),
        ],
    )
    def test_MUST_preserve_order_and_count(
        self, codec: Codec, token: str, expected: tuple[str, ...]
    ) -> None:
        raw = f"ewp 1.0 GET none {token} 0 0\n".encode()
        assert codec.decode_request(raw).response_compression == expected


# ===================================================================
# Reference cases
# ===================================================================

class TestReferenceCases:
    """Reference frames and their decoded values."""

    def test_request_with_body(self, codec: Codec) -> None:
        req = codec.decode_request(b"ewp 1.0 GET none none 5 3\nhello" + b"abc")
        assert req == Request(
            protocol="ewp",
            version="1.0",
            command="GET",
            request_compression="none",
            response_compression=("none",),
            head_only=False,
            headers=b"hello",
            body=b"abc",
        )

    def test_head_only_request(self, codec: Codec) -> None:
        req = codec.decode_request(b"ewp 1.0 GET none none 5 3 H\nhello" + b"abc")
        assert req.head_only is True
        assert req.headers == b"hello"
        assert req.body is None

    def test_response(self, codec: Codec) -> None:
        resp = codec.decode_response(b"200 gzip 0 4\n" + b"data")
        assert resp == Response(code=200, compression="gzip", headers=b"", body=b"data")

    def test_MUST_reject_truncated_headers(self, codec: Codec) -> None:
        with pytest.raises(TruncatedFrame):
            codec.decode_response(b"200 none 10 0\nabcd")

    def test_MUST_reject_non_numeric_length(self, codec: Codec) -> None:
        with pytest.raises(InvalidLength):
            codec.decode_request(b"ewp 1.0 GET none none abc 0\n")

    @pytest.mark.parametrize("kind", ["request", "response"])
    def test_MUST_reject_missing_terminator(self, codec: Codec, kind: str) -> None:
        with pytest.raises(MalformedFrame):
            codec.decode(b"ewp 1.0 GET none none 0 0", kind)

    @pytest.mark.parametrize(
        "raw",
        [
            b"\n",
            b"ewp\n",
            b"ewp 1.0 GET none none 0\n",
        ],
    )
    def test_MUST_reject_short_request_lines(self, codec: Codec, raw: bytes) -> None:
        with pytest.raises(MalformedFrame):
            codec.decode_request(raw)

    def test_MUST_surface_typed_errors_only(self, codec: Codec) -> None:
        for raw in (b"", b"x\n", b"1 2 3\n", b"a b c d\n"):
            with pytest.raises(EWPError):
                codec.decode_response(raw)
