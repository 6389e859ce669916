"""EWP codec configuration.

Defines the validated configuration model consumed by
:class:`ewp.wire.codec.Codec`.  The defaults reproduce the plain wire
format with no extra limits, so ``CodecConfig()`` is sufficient for most
callers.
"""
from __future__ import annotations

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator

_WIRE_ALPHABET = "\n 0123456789,+-H"
"""Characters the framing relies on being single ASCII bytes."""


class CodecConfig(BaseModel):
    """Configuration for an EWP codec."""

    model_config = ConfigDict(strict=True, frozen=True)

    text_encoding: str = Field(
        default="utf-8",
        description=(
            "Encoding of the header-line tokens, also applied to ``str`` "
            "input before decoding."
        ),
    )
    max_frame_size_bytes: int | None = Field(
        default=None,
        ge=0,
        description=(
            "Largest declared frame size (header line, terminator, headers "
            "and body) the codec accepts.  ``None`` disables the limit."
        ),
    )

    @field_validator("text_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown text encoding: {value!r}") from exc
        # Framing searches for ASCII bytes and slices by byte offset.
        if _WIRE_ALPHABET.encode(value) != _WIRE_ALPHABET.encode("ascii"):
            raise ValueError(f"text encoding {value!r} is not ASCII-compatible")
        return value
