"""EWP wire subpackage -- frame decoding and encoding.

* **Codec** -- configurable decoder/encoder for request and response
  frames (:mod:`~ewp.wire.codec`).
* **Helpers** -- the same operations on a default codec.
"""
from __future__ import annotations

from ewp.wire.codec import (
    REQUEST_MIN_TOKENS,
    RESPONSE_MIN_TOKENS,
    Codec,
    decode,
    decode_request,
    decode_response,
    encode,
    encode_request,
    encode_response,
    parse_kind,
    reencode,
)

__all__ = [
    "REQUEST_MIN_TOKENS",
    "RESPONSE_MIN_TOKENS",
    "Codec",
    "decode",
    "decode_request",
    "decode_response",
    "encode",
    "encode_request",
    "encode_response",
    "parse_kind",
    "reencode",
]
