"""Protocols the chat log filter and batch loop are written against.

PatternConfig satisfies FragmentMatcher; FileDocumentStore satisfies
DocumentStore. Tests substitute in-memory versions of both.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FragmentMatcher(Protocol):
    """Decision used by the chat log filter for each message fragment."""

    def ensure_patterns(self) -> None:
        ...

    def matches(self, fragment: str) -> bool:
        ...


class DocumentStore(Protocol):
    """Document read/write operations required by the processor."""

    def read(self, path: Path) -> str:
        ...

    def write(self, path: Path, text: str) -> None:
        ...
