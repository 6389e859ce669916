"""EWP error-code hierarchy.

Every failure the codec can report is a concrete exception class with a
stable error code, so callers can branch on the class or on ``code``.

Hierarchy
---------
::

    EWPError
    +-- FrameError            (EWP-E1xx)
    +-- ConfigurationError    (EWP-E9xx)

Usage
-----
Raise concrete subclasses directly::

    raise TruncatedFrame(details={"declared": 10, "available": 4})

Catch by category::

    try:
        ...
    except FrameError:
        # handles MalformedFrame, InvalidLength, TruncatedFrame, etc.
        ...
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class EWPError(Exception):
    """Base exception for all EWP errors.

    Attributes
    ----------
    code : str
        EWP error code, e.g. ``"EWP-E100"``.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "EWP-E000"
    message: str = "Unknown EWP error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a plain dictionary."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return payload

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------

class FrameError(EWPError):
    """EWP-E1xx -- The input buffer is not a valid EWP frame."""

    code = "EWP-E1XX"


class ConfigurationError(EWPError):
    """EWP-E9xx -- The caller asked for something the codec cannot do."""

    code = "EWP-E9XX"


# ===================================================================
# EWP-E1xx  Frame Errors
# ===================================================================

class MalformedFrame(FrameError):
    """EWP-E100 -- No header line, or too few header-line tokens."""

    code = "EWP-E100"
    message = "Malformed frame"
    resolution = (
        "Terminate the header line with '\\n' and supply every required "
        "space-separated token."
    )


class InvalidLength(FrameError):
    """EWP-E101 -- A length token is not a non-negative integer."""

    code = "EWP-E101"
    message = "Length field is not a non-negative integer"
    resolution = "Encode header and body lengths as plain decimal digits."


class InvalidStatusCode(FrameError):
    """EWP-E102 -- The response status token is not an integer."""

    code = "EWP-E102"
    message = "Response status code is not an integer"
    resolution = "Encode the status code as a decimal integer."


class TruncatedFrame(FrameError):
    """EWP-E103 -- Declared lengths exceed the bytes actually available."""

    code = "EWP-E103"
    message = "Frame is shorter than its declared header and body lengths"
    resolution = (
        "Supply the whole frame before decoding; the codec does not "
        "buffer partial input."
    )


class FrameTooLarge(FrameError):
    """EWP-E104 -- Declared frame size exceeds the configured maximum."""

    code = "EWP-E104"
    message = "Frame exceeds the maximum allowed size"
    resolution = (
        "Reduce the header or body size, or raise max_frame_size_bytes "
        "in the codec configuration."
    )


class UnencodableToken(FrameError):
    """EWP-E105 -- A header-line token cannot be represented in the text encoding."""

    code = "EWP-E105"
    message = "Header-line token cannot be encoded"
    resolution = (
        "Use tokens the configured text_encoding can represent, or choose "
        "a wider ASCII-compatible encoding such as utf-8."
    )


# ===================================================================
# EWP-E9xx  Configuration Errors
# ===================================================================

class UnknownMessageKind(ConfigurationError):
    """EWP-E900 -- The mode selector is neither ``request`` nor ``response``."""

    code = "EWP-E900"
    message = "Unknown message kind"
    resolution = "Use one of the message kinds: request, response."


# ---------------------------------------------------------------------------
# Lookup helper
# ---------------------------------------------------------------------------

_CODE_MAP: dict[str, type[EWPError]] = {
    cls.code: cls
    for cls in [
        # E1xx
        MalformedFrame,
        InvalidLength,
        InvalidStatusCode,
        TruncatedFrame,
        FrameTooLarge,
        UnencodableToken,
        # E9xx
        UnknownMessageKind,
    ]
}


def error_from_code(code: str, message: str | None = None) -> EWPError:
    """Instantiate the correct exception class for an EWP error code.

    Parameters
    ----------
    code:
        An EWP error code such as ``"EWP-E103"``.
    message:
        Optional override for the default error message.

    Raises
    ------
    KeyError
        If *code* is not a recognised EWP error code.
    """
    cls = _CODE_MAP[code]
    return cls(message) if message else cls()
