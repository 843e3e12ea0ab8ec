"""Input documents — a named text read in full, plus its error bookkeeping."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

STDIN_NAME = "-"


class InputFileError(OSError):
    """The document could not be opened or decoded as text."""

    def __init__(self, file_name: str, reason: str = "") -> None:
        super().__init__(f"{file_name}: failed to open input file")
        self.file_name = file_name
        self.reason = reason


class InputDocument:
    """A document's full text with its name, silent mode and error flag."""

    def __init__(self, name: str, text: str, silent: bool = False) -> None:
        self.name = name
        self.text = text
        self.silent = silent
        self._any_error = False

    @classmethod
    def from_path(cls, path: str | Path, silent: bool = False) -> InputDocument:
        """Read a whole document; ``-`` reads standard input."""
        name = str(path)
        try:
            if name == STDIN_NAME:
                text = sys.stdin.read()
            else:
                text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InputFileError(name, str(e)) from e
        return cls(name, text, silent=silent)

    @property
    def any_error(self) -> bool:
        return self._any_error

    def handle_error(self, msg: str = "", line: int = 0) -> None:
        """Mark the document as erroneous and report ``msg`` if given.

        Silent mode only affects the callers that choose to honour it; a
        message passed here is always reported.
        """
        self._any_error = True
        if not msg:
            return
        if line:
            logger.error("%s:%d: error: %s", self.name, line, msg)
        else:
            logger.error("%s: error: %s", self.name, msg)
