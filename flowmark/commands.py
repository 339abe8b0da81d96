"""
Host-facing commands.

The editor shell calls these two functions and shows `error` to the user.
Failures come back as values; nothing here raises an FLMError.

    result = save_flm("notes.flm", document_json)
    if not result.ok:
        show_error(result.error)

    result = load_flm("notes.flm")
    document_json = result.value
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from flowmark.errors import FLMError
from flowmark.reader import FLMReader
from flowmark.writer import FLMWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    value: str | None = None
    error: str | None = None
    category: str | None = None

    @classmethod
    def success(cls, value: str | None = None) -> CommandResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, exc: FLMError) -> CommandResult:
        return cls(ok=False, error=str(exc), category=exc.category)


def save_flm(path: str | Path, document_json: str) -> CommandResult:
    """Save `document_json` as a .flm file. `value` is None on success."""
    try:
        FLMWriter.write(path, document_json)
    except FLMError as exc:
        logger.warning("save_flm %s failed: %s", path, exc)
        return CommandResult.failure(exc)
    return CommandResult.success()


def load_flm(path: str | Path) -> CommandResult:
    """Load a .flm file. `value` is the document.json text on success."""
    try:
        text = FLMReader.read(path)
    except FLMError as exc:
        logger.warning("load_flm %s failed: %s", path, exc)
        return CommandResult.failure(exc)
    return CommandResult.success(text)
