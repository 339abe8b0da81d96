"""
Flowmark - .flm document container.

A .flm file is a zip archive with one member, document.json, holding the
editor's JSON document tagged `"format": "flowmark"`.
"""

__version__ = "0.1.0"

from flowmark.spec import MEMBER_NAME, FORMAT_TAG, EXTENSION
from flowmark.errors import (
    FLMError,
    FLMIOError,
    FLMContainerError,
    FLMMemberNotFoundError,
    FLMEncodingError,
    FLMInvalidJSONError,
    FLMFormatTagError,
)
from flowmark.codec import ArchiveCodec
from flowmark.validation import FormatTag, check_format_tag
from flowmark.writer import FLMWriter, save
from flowmark.reader import FLMReader, load
from flowmark.commands import CommandResult, save_flm, load_flm
