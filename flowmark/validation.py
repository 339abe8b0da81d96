"""
Format tag validation.

The payload is opaque except for one field. It is parsed into a minimal
typed view (`FormatTag`) instead of poking at a dict, so a missing tag, a
wrong tag and a non-string tag all fail the same way.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from flowmark.errors import FLMFormatTagError, FLMInvalidJSONError
from flowmark.spec import FORMAT_TAG, MEMBER_NAME


class FormatTag(BaseModel):
    """The only part of a Flowmark document this package looks at."""

    model_config = ConfigDict(extra="allow", strict=True, frozen=True)

    format: Literal["flowmark"]


def _reject_constant(name: str) -> Any:
    # Python's json accepts NaN/Infinity, strict JSON does not
    raise ValueError(f"Invalid constant {name!r}")


def parse_document(text: str) -> Any:
    """Parse payload text as strict JSON. Raises FLMInvalidJSONError."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise FLMInvalidJSONError(f"Invalid JSON in {MEMBER_NAME}: {exc}") from exc


def check_format_tag(text: str) -> FormatTag:
    """
    Verify that payload text is JSON tagged `format: "flowmark"`.

    Returns the typed view on success. Raises FLMInvalidJSONError when the
    text does not parse and FLMFormatTagError when it parses but the tag is
    absent, not a string, or not "flowmark".
    """
    value = parse_document(text)
    if not isinstance(value, dict):
        raise FLMFormatTagError(f"Invalid format: expected '{FORMAT_TAG}'")
    try:
        return FormatTag.model_validate(value)
    except ValidationError as exc:
        raise FLMFormatTagError(f"Invalid format: expected '{FORMAT_TAG}'") from exc
