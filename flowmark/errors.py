"""
Flowmark errors - one exception class per failure category.

Every class carries a short `category` string so callers (and the command
layer) can tell "not a flowmark file" apart from "damaged file" without
parsing messages.
"""

from __future__ import annotations


class FLMError(Exception):
    """Base class for all .flm read/write failures."""

    category = "error"


class FLMIOError(FLMError):
    """File could not be created, opened, read, written or replaced."""

    category = "io"


class FLMContainerError(FLMError):
    """Bytes are not a valid archive, or the archive could not be built."""

    category = "container"


class FLMMemberNotFoundError(FLMError):
    """Archive is well-formed but has no document.json member."""

    category = "member"


class FLMEncodingError(FLMError):
    """document.json is not valid UTF-8."""

    category = "encoding"


class FLMInvalidJSONError(FLMError, ValueError):
    """document.json is not valid JSON."""

    category = "invalid_json"


class FLMFormatTagError(FLMError, ValueError):
    """Payload is JSON but is not tagged `format: "flowmark"`."""

    category = "format_tag"
