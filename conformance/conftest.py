"""Shared fixtures for EWP conformance tests.

Provides a default codec and a spread of request and response values
covering the head-only, empty-block and binary-payload variants.
"""
from __future__ import annotations

import pytest

from ewp.core.types import Request, Response
from ewp.wire.codec import Codec

BINARY_BLOCK = bytes(range(256))


@pytest.fixture()
def codec() -> Codec:
    return Codec()


@pytest.fixture(
    params=["plain", "head_only", "empty", "binary", "compression_list"],
)
def request_value(request: pytest.FixtureRequest) -> Request:
    base = {"protocol": "ewp", "version": "1.0", "command": "GET"}
    variants: dict[str, Request] = {
        "plain": Request(**base, headers=b"hello", body=b"abc"),
        "head_only": Request(**base, head_only=True, headers=b"hello"),
        "empty": Request(**base),
        "binary": Request(
            **base,
            request_compression="gzip",
            headers=BINARY_BLOCK,
            body=b"\n" + BINARY_BLOCK,
        ),
        "compression_list": Request(
            **base,
            response_compression=("br", "", "gzip", "gzip"),
            body=b"x",
        ),
    }
    return variants[request.param]


@pytest.fixture(params=["plain", "empty", "binary", "error"])
def response_value(request: pytest.FixtureRequest) -> Response:
    variants: dict[str, Response] = {
        "plain": Response(code=200, compression="gzip", body=b"data"),
        "empty": Response(code=204),
        "binary": Response(code=206, headers=BINARY_BLOCK, body=BINARY_BLOCK[::-1]),
        "error": Response(code=-1, headers=b"reason"),
    }
    return variants[request.param]
