"""Value types for a chatsieve run.

A run pairs each input chat log with an output path (FilterJob), filters it
into a FilterResult, and records a FilterOutcome per file in a BatchSummary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ChatLogParts:
    """A document split into its verbatim preamble and message fragments."""

    preamble: str
    fragments: list[str]


@dataclass(frozen=True)
class FilterResult:
    """Filtered document text plus fragment counts for reporting."""

    text: str
    fragments_total: int
    fragments_kept: int

    @property
    def fragments_dropped(self) -> int:
        return self.fragments_total - self.fragments_kept


@dataclass(frozen=True)
class FilterJob:
    """One input document and the path its filtered copy is written to."""

    input_path: Path
    output_path: Path


@dataclass(frozen=True)
class FilterOutcome:
    """Result of processing one job in a batch."""

    job: FilterJob
    elapsed_ms: float
    result: Optional[FilterResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchSummary:
    outcomes: list[FilterOutcome] = field(default_factory=list)
    halted: bool = False

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.ok)
