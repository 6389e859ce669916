"""EWP message types.

This module defines the two message values carried by an EWP frame and the
selector used to choose between them.  All public symbols are re-exported
from the top-level ``ewp`` package.

Key design decisions:
* ``Request`` and ``Response`` are independent, frozen Pydantic models.
  They share no base type; :class:`MessageKind` tells a caller which one
  to expect.
* ``headers`` and ``body`` are raw ``bytes`` so binary payloads survive
  untouched.  A request's ``body`` is ``None`` exactly when the request is
  head-only, which keeps "absent" distinct from "empty".
* Header-line tokens may not contain a space or a line terminator since
  the wire form has no escaping.
"""
from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Wire constants
# ---------------------------------------------------------------------------

FIELD_SEPARATOR: str = " "
LINE_TERMINATOR: str = "\n"
LIST_SEPARATOR: str = ","
HEAD_ONLY_MARKER: str = "H"

NO_COMPRESSION: str = "none"
"""Conventional label for an uncompressed block."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class MessageKind(enum.StrEnum):
    """Which message an EWP frame carries."""

    REQUEST = "request"
    RESPONSE = "response"


# ---------------------------------------------------------------------------
# Token checks
# ---------------------------------------------------------------------------

def _check_token(value: str) -> str:
    if FIELD_SEPARATOR in value or LINE_TERMINATOR in value:
        raise ValueError(
            f"token {value!r} must not contain a space or a line terminator"
        )
    return value


def _none_to_empty(value: Any) -> Any:
    return b"" if value is None else value


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class Request(BaseModel):
    """An EWP request.

    ``response_compression`` lists, in order of preference, the
    compressions the sender accepts for the response.  A head-only request
    asks for headers only and carries no body.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    protocol: str
    version: str
    command: str
    request_compression: str = NO_COMPRESSION
    response_compression: tuple[str, ...] = Field(
        default=(NO_COMPRESSION,),
        min_length=1,
        description="Accepted response compressions, comma-joined on the wire.",
    )
    head_only: bool = False
    headers: bytes = b""
    body: bytes | None = b""

    @model_validator(mode="before")
    @classmethod
    def _normalise_body(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("head_only", False) is True:
            if data.get("body") is not None:
                raise ValueError("a head-only request carries no body")
            return {**data, "body": None}
        if data.get("body", b"") is None:
            return {**data, "body": b""}
        return data

    @field_validator("protocol", "version", "command", "request_compression")
    @classmethod
    def _single_token(cls, value: str) -> str:
        return _check_token(value)

    @field_validator("response_compression", mode="before")
    @classmethod
    def _as_tuple(cls, value: Any) -> Any:
        if isinstance(value, list):
            return tuple(value)
        return value

    @field_validator("response_compression")
    @classmethod
    def _list_elements(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for item in value:
            _check_token(item)
            if LIST_SEPARATOR in item:
                raise ValueError(f"compression {item!r} must not contain a comma")
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _absent_headers(cls, value: Any) -> Any:
        return _none_to_empty(value)


class Response(BaseModel):
    """An EWP response.  The body is always present, possibly empty."""

    model_config = ConfigDict(strict=True, frozen=True)

    code: int
    compression: str = NO_COMPRESSION
    headers: bytes = b""
    body: bytes = b""

    @field_validator("compression")
    @classmethod
    def _single_token(cls, value: str) -> str:
        return _check_token(value)

    @field_validator("headers", "body", mode="before")
    @classmethod
    def _absent_block(cls, value: Any) -> Any:
        return _none_to_empty(value)


Message = Request | Response
"""Either EWP message."""
