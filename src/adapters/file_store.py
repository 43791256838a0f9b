"""Reads and writes chat log files as UTF-8 text without newline translation."""

from __future__ import annotations

import logging
from pathlib import Path

from core.errors import DocumentDecodeError

LOGGER = logging.getLogger(__name__)


class FileDocumentStore:
    """Thin file wrapper that satisfies the DocumentStore contract."""

    def __init__(self, overwrite: bool = False) -> None:
        self._overwrite = overwrite

    def read(self, path: Path) -> str:
        # newline="" keeps \r\n intact so untouched fragments stay byte-exact.
        with open(path, "r", encoding="utf-8", newline="") as handle:
            try:
                return handle.read()
            except UnicodeDecodeError as err:
                raise DocumentDecodeError(f"{path} is not valid UTF-8: {err}") from err

    def write(self, path: Path, text: str) -> None:
        """Write the document, refusing to replace a file unless allowed.

        Missing parent directories are created recursively.
        """

        path = Path(path)
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            LOGGER.debug("Created output directory %s", path.parent)

        mode = "w" if self._overwrite else "x"
        with open(path, mode, encoding="utf-8", newline="") as handle:
            handle.write(text)
