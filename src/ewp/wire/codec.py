"""EWP frame codec.

A frame is one header line terminated by ``\\n`` followed by two
length-prefixed blocks::

    request:   protocol version command compression accepted,list hlen blen [H]\\n<headers><body>
    response:  code compression hlen blen\\n<headers><body>

This module provides:

* **Codec** -- decodes byte buffers into :class:`~ewp.core.types.Request`
  and :class:`~ewp.core.types.Response` values and encodes them back into
  their canonical wire form.
* **Module-level helpers** -- the same operations on a default codec.

All helpers are *synchronous* and side-effect-free.  The whole frame must
be in memory before decoding; nothing is buffered between calls.
"""
from __future__ import annotations

import logging
import re

from ewp.core.config import CodecConfig
from ewp.core.errors import (
    FrameTooLarge,
    InvalidLength,
    InvalidStatusCode,
    MalformedFrame,
    TruncatedFrame,
    UnencodableToken,
    UnknownMessageKind,
)
from ewp.core.types import (
    FIELD_SEPARATOR,
    HEAD_ONLY_MARKER,
    LINE_TERMINATOR,
    LIST_SEPARATOR,
    Message,
    MessageKind,
    Request,
    Response,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

REQUEST_MIN_TOKENS: int = 7
"""protocol, version, command, compression, compression list, two lengths."""

RESPONSE_MIN_TOKENS: int = 4
"""code, compression, two lengths."""

_NEWLINE = LINE_TERMINATOR.encode("ascii")
_LENGTH_RE = re.compile(r"[0-9]+")
_STATUS_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Header-line helpers
# ---------------------------------------------------------------------------

def _parse_length(token: str, field: str) -> int:
    if not _LENGTH_RE.fullmatch(token):
        raise InvalidLength(
            f"{field} {token!r} is not a non-negative integer",
            details={"field": field, "token": token},
        )
    return int(token)


def _parse_status(token: str) -> int:
    if not _STATUS_RE.fullmatch(token):
        raise InvalidStatusCode(
            f"Status code {token!r} is not an integer",
            details={"token": token},
        )
    return int(token)


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


class Codec:
    """Decodes and encodes EWP frames.

    Parameters
    ----------
    config:
        Codec configuration.  Defaults to :class:`CodecConfig` with no
        frame size limit and UTF-8 header tokens.
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config if config is not None else CodecConfig()

    @property
    def config(self) -> CodecConfig:
        return self._config

    # -- decoding ------------------------------------------------------------

    def _header_line(
        self, raw: str | bytes, min_tokens: int, kind: MessageKind
    ) -> tuple[bytes, list[str], int]:
        """Split off the header line.

        Returns the frame as bytes, the header-line tokens, and the offset
        of the first byte after the line terminator.
        """
        if isinstance(raw, str):
            try:
                data = raw.encode(self._config.text_encoding)
            except UnicodeEncodeError as exc:
                raise MalformedFrame(
                    f"Input is not representable in {self._config.text_encoding}: {exc}",
                    details={"kind": kind.value},
                ) from exc
        elif isinstance(raw, (bytes, bytearray, memoryview)):
            data = bytes(raw)
        else:
            raise TypeError(
                f"Expected str, bytes, bytearray or memoryview, got {type(raw).__name__}"
            )

        newline = data.find(_NEWLINE)
        if newline == -1:
            raise MalformedFrame(
                "No line terminator found",
                details={"kind": kind.value, "size": len(data)},
            )

        try:
            line = data[:newline].decode(self._config.text_encoding)
        except UnicodeDecodeError as exc:
            raise MalformedFrame(
                f"Header line is not valid {self._config.text_encoding}: {exc}",
                details={"kind": kind.value},
            ) from exc

        tokens = line.split(FIELD_SEPARATOR)
        if len(tokens) < min_tokens:
            raise MalformedFrame(
                f"Not enough elements in {kind.value} line: "
                f"expected at least {min_tokens}, got {len(tokens)}",
                details={"kind": kind.value, "tokens": len(tokens), "minimum": min_tokens},
            )
        return data, tokens, newline + 1

    def _check_available(
        self, data: bytes, start: int, header_length: int, body_length: int
    ) -> None:
        declared = header_length + body_length
        limit = self._config.max_frame_size_bytes
        if limit is not None and start + declared > limit:
            raise FrameTooLarge(
                f"Declared frame size {start + declared} bytes exceeds maximum "
                f"{limit} bytes",
                details={"size": start + declared, "max_size": limit},
            )

        available = len(data) - start
        if available < declared:
            raise TruncatedFrame(
                f"Declared {declared} bytes of headers and body but only "
                f"{available} are available",
                details={
                    "header_length": header_length,
                    "body_length": body_length,
                    "available": available,
                },
            )

    def decode_request(self, raw: str | bytes) -> Request:
        """Decode one request frame.

        Raises
        ------
        MalformedFrame
            If there is no header line or it has fewer than seven tokens.
        InvalidLength
            If a length token is not a non-negative integer.
        TruncatedFrame
            If the buffer is shorter than the declared lengths.
        FrameTooLarge
            If the declared frame exceeds ``max_frame_size_bytes``.
        """
        data, tokens, start = self._header_line(raw, REQUEST_MIN_TOKENS, MessageKind.REQUEST)

        header_length = _parse_length(tokens[5], "header length")
        body_length = _parse_length(tokens[6], "body length")
        head_only = len(tokens) > 7 and tokens[7] == HEAD_ONLY_MARKER
        extra = tokens[8:] if head_only else tokens[7:]
        if extra:
            logger.debug("Ignoring extra request line tokens: %r", extra)

        self._check_available(data, start, header_length, body_length)

        body_start = start + header_length
        headers = data[start:body_start]
        # A head-only request still consumes its declared body bytes.
        body = None if head_only else data[body_start : body_start + body_length]

        logger.debug(
            "Decoded request %s %s: headers=%d body=%d head_only=%s",
            tokens[0],
            tokens[2],
            header_length,
            body_length,
            head_only,
        )
        return Request(
            protocol=tokens[0],
            version=tokens[1],
            command=tokens[2],
            request_compression=tokens[3],
            response_compression=tuple(tokens[4].split(LIST_SEPARATOR)),
            head_only=head_only,
            headers=headers,
            body=body,
        )

    def decode_response(self, raw: str | bytes) -> Response:
        """Decode one response frame.

        Raises
        ------
        MalformedFrame
            If there is no header line or it has fewer than four tokens.
        InvalidStatusCode
            If the status token is not an integer.
        InvalidLength
            If a length token is not a non-negative integer.
        TruncatedFrame
            If the buffer is shorter than the declared lengths.
        FrameTooLarge
            If the declared frame exceeds ``max_frame_size_bytes``.
        """
        data, tokens, start = self._header_line(raw, RESPONSE_MIN_TOKENS, MessageKind.RESPONSE)

        code = _parse_status(tokens[0])
        header_length = _parse_length(tokens[2], "header length")
        body_length = _parse_length(tokens[3], "body length")
        if len(tokens) > RESPONSE_MIN_TOKENS:
            logger.debug("Ignoring extra response line tokens: %r", tokens[4:])

        self._check_available(data, start, header_length, body_length)

        body_start = start + header_length
        logger.debug(
            "Decoded response %d: headers=%d body=%d", code, header_length, body_length
        )
        return Response(
            code=code,
            compression=tokens[1],
            headers=data[start:body_start],
            body=data[body_start : body_start + body_length],
        )

    def decode(self, raw: str | bytes, kind: MessageKind | str) -> Message:
        """Decode a frame of the given *kind*.

        Raises
        ------
        UnknownMessageKind
            If *kind* is not ``"request"`` or ``"response"``.
        """
        if parse_kind(kind) is MessageKind.REQUEST:
            return self.decode_request(raw)
        return self.decode_response(raw)

    # -- encoding ------------------------------------------------------------

    def _encode_line(self, tokens: list[str], kind: MessageKind) -> bytes:
        line = FIELD_SEPARATOR.join(tokens) + LINE_TERMINATOR
        try:
            return line.encode(self._config.text_encoding)
        except UnicodeEncodeError as exc:
            raise UnencodableToken(
                f"{kind.value.capitalize()} line is not representable in "
                f"{self._config.text_encoding}: {exc}",
                details={"kind": kind.value, "position": exc.start},
            ) from exc

    def encode_request(self, request: Request) -> bytes:
        """Encode a request into its canonical wire form.

        Raises
        ------
        UnencodableToken
            If a token is not representable in the configured text encoding.
        """
        body = b"" if request.head_only or request.body is None else request.body
        tokens = [
            request.protocol,
            request.version,
            request.command,
            request.request_compression,
            LIST_SEPARATOR.join(request.response_compression),
            str(len(request.headers)),
            str(len(body)),
        ]
        if request.head_only:
            tokens.append(HEAD_ONLY_MARKER)
        return self._encode_line(tokens, MessageKind.REQUEST) + request.headers + body

    def encode_response(self, response: Response) -> bytes:
        """Encode a response into its canonical wire form."""
        tokens = [
            str(response.code),
            response.compression,
            str(len(response.headers)),
            str(len(response.body)),
        ]
        return (
            self._encode_line(tokens, MessageKind.RESPONSE)
            + response.headers
            + response.body
        )

    def encode(self, message: Message) -> bytes:
        """Encode either message type.

        Raises
        ------
        TypeError
            If *message* is neither a :class:`Request` nor a :class:`Response`.
        """
        if isinstance(message, Request):
            return self.encode_request(message)
        if isinstance(message, Response):
            return self.encode_response(message)
        raise TypeError(
            f"Expected Request or Response, got {type(message).__name__}"
        )

    def reencode(self, raw: str | bytes, kind: MessageKind | str) -> bytes:
        """Decode a frame and return its canonical encoding."""
        return self.encode(self.decode(raw, kind))


# ---------------------------------------------------------------------------
# Kind selection
# ---------------------------------------------------------------------------

def parse_kind(kind: MessageKind | str) -> MessageKind:
    """Resolve a mode selector into a :class:`MessageKind`.

    Raises
    ------
    UnknownMessageKind
        If *kind* names no message kind.
    """
    try:
        return MessageKind(kind)
    except ValueError as exc:
        raise UnknownMessageKind(
            f"Invalid message kind given: {kind!r}",
            details={"kind": str(kind)},
        ) from exc


# ---------------------------------------------------------------------------
# Default-codec helpers
# ---------------------------------------------------------------------------

_DEFAULT_CODEC = Codec()


def decode_request(raw: str | bytes) -> Request:
    """Decode a request frame with the default codec."""
    return _DEFAULT_CODEC.decode_request(raw)


def decode_response(raw: str | bytes) -> Response:
    """Decode a response frame with the default codec."""
    return _DEFAULT_CODEC.decode_response(raw)


def decode(raw: str | bytes, kind: MessageKind | str) -> Message:
    return _DEFAULT_CODEC.decode(raw, kind)


def encode_request(request: Request) -> bytes:
    return _DEFAULT_CODEC.encode_request(request)


def encode_response(response: Response) -> bytes:
    return _DEFAULT_CODEC.encode_response(response)


def encode(message: Message) -> bytes:
    """Encode a request or response with the default codec."""
    return _DEFAULT_CODEC.encode(message)


def reencode(raw: str | bytes, kind: MessageKind | str) -> bytes:
    """Decode then re-encode a frame with the default codec."""
    return _DEFAULT_CODEC.reencode(raw, kind)
