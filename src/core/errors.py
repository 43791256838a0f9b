"""Error types raised by the core.

The core never terminates the process; callers decide how to report these.
"""

from __future__ import annotations


class ChatSieveError(Exception):
    """Base class for all core errors."""


class PatternConfigError(ChatSieveError, ValueError):
    """Invalid or incomplete include/exclude configuration."""


class ChatLogStructureError(ChatSieveError, ValueError):
    """The document does not have the expected chat container layout."""

    def __init__(self, message: str, marker_count: int) -> None:
        super().__init__(message)
        self.marker_count = marker_count


class DocumentDecodeError(ChatSieveError):
    """A document could not be decoded as UTF-8 text."""
