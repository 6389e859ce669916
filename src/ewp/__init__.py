"""EWP -- Reference Codec.

A frame is a single header line followed by a length-prefixed headers
block and a length-prefixed body block.  This package decodes frames into
:class:`Request` / :class:`Response` values and encodes them back into the
exact wire form.

Modules
-------
* Core types, errors and configuration (:mod:`ewp.core`)
* Frame codec (:mod:`ewp.wire`)
* Command line harness (:mod:`ewp.cli`)
"""
from __future__ import annotations

__version__ = "1.0.0"

from ewp.core.config import CodecConfig
from ewp.core.errors import (
    ConfigurationError,
    EWPError,
    FrameError,
    FrameTooLarge,
    UnencodableToken,
    InvalidLength,
    InvalidStatusCode,
    MalformedFrame,
    TruncatedFrame,
    UnknownMessageKind,
    error_from_code,
)
from ewp.core.types import (
    NO_COMPRESSION,
    Message,
    MessageKind,
    Request,
    Response,
)
from ewp.wire import (
    Codec,
    decode,
    decode_request,
    decode_response,
    encode,
    encode_request,
    encode_response,
    reencode,
)

__all__ = [
    "__version__",
    # Config
    "CodecConfig",
    # Errors
    "EWPError",
    "FrameError",
    "ConfigurationError",
    "MalformedFrame",
    "InvalidLength",
    "InvalidStatusCode",
    "TruncatedFrame",
    "FrameTooLarge",
    "UnencodableToken",
    "UnknownMessageKind",
    "error_from_code",
    # Types
    "NO_COMPRESSION",
    "Message",
    "MessageKind",
    "Request",
    "Response",
    # Codec
    "Codec",
    "decode",
    "decode_request",
    "decode_response",
    "encode",
    "encode_request",
    "encode_response",
    "reencode",
]
