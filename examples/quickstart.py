#!/usr/bin/env python3
"""EWP quickstart -- encode and decode frames.

Demonstrates the core workflow of the EWP codec:

1. Build a request and encode it.
2. Decode the wire bytes back into a request.
3. Decode a head-only request and show the absent body.
4. Decode a response and re-encode a frame canonically.
5. Handle a malformed frame.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

from ewp import (
    Codec,
    CodecConfig,
    EWPError,
    Request,
    decode_request,
    decode_response,
    encode,
    reencode,
)


def main() -> None:
    # -- Step 1: Build and encode a request ---------------------------------
    request = Request(
        protocol="ewp",
        version="1.0",
        command="GET",
        response_compression=("gzip", "none"),
        headers=b"hello",
        body=b"abc",
    )
    wire = encode(request)
    print(f"[1] Encoded request: {wire!r}")

    # -- Step 2: Decode it again --------------------------------------------
    decoded = decode_request(wire)
    print(f"[2] Round-trip equal: {decoded == request}")

    # -- Step 3: Head-only request ------------------------------------------
    head_frame = b"ewp 1.0 GET none none 5 3 H\nhelloabc"
    head = decode_request(head_frame)
    print(f"[3] Head-only body: {head.body!r}")

    # -- Step 4: Response and canonical re-encoding -------------------------
    response = decode_response(b"200 gzip 0 4\ndata")
    print(f"[4] Response {response.code} body={response.body!r}")
    print(f"    Canonical head-only frame: {reencode(head_frame, 'request')!r}")

    # -- Step 5: Errors ------------------------------------------------------
    codec = Codec(CodecConfig(max_frame_size_bytes=1024))
    try:
        codec.decode_response(b"200 none 10 0\nabcd")
    except EWPError as exc:
        print(f"[5] Rejected: {exc.code} {exc.message}")


if __name__ == "__main__":
    main()
