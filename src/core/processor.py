"""Batch loop over chat log files.

Each job is read, filtered and written before the next one starts. A failing
job ends only itself unless the run is strict.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from core.chat_log import filter_document
from core.errors import ChatSieveError
from core.models import BatchSummary, FilterJob, FilterOutcome
from core.ports import DocumentStore, FragmentMatcher

LOGGER = logging.getLogger(__name__)

OutcomeCallback = Callable[[FilterOutcome], None]


class ChatLogProcessor:
    """Orchestrates reading, filtering, and writing of chat log documents."""

    def __init__(self, config: FragmentMatcher, store: DocumentStore) -> None:
        self._config = config
        self._store = store

    def process(self, job: FilterJob) -> FilterOutcome:
        """Process one job to completion. Errors propagate to the caller."""

        start = time.perf_counter()
        document = self._store.read(job.input_path)
        result = filter_document(document, self._config)
        self._store.write(job.output_path, result.text)
        elapsed_ms = (time.perf_counter() - start) * 1000

        LOGGER.info(
            "Filtered %s: kept %s of %s fragments in %.0fms",
            job.input_path,
            result.fragments_kept,
            result.fragments_total,
            elapsed_ms,
        )
        return FilterOutcome(job=job, elapsed_ms=elapsed_ms, result=result)

    def run(
        self,
        jobs: Iterable[FilterJob],
        strict: bool = False,
        on_outcome: Optional[OutcomeCallback] = None,
    ) -> BatchSummary:
        """Process jobs sequentially.

        A failed job is recorded in the summary. In strict mode the run stops
        at the first failure, otherwise it moves on to the next job. The
        callback sees every outcome before the next job starts.
        """

        summary = BatchSummary()
        for job in jobs:
            start = time.perf_counter()
            try:
                outcome = self.process(job)
            except (ChatSieveError, OSError) as err:
                LOGGER.debug("Job for %s failed", job.input_path, exc_info=True)
                outcome = FilterOutcome(
                    job=job,
                    elapsed_ms=(time.perf_counter() - start) * 1000,
                    error=str(err),
                )

            summary.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
            if strict and not outcome.ok:
                summary.halted = True
                break

        LOGGER.info(
            "Batch complete: succeeded=%s, failed=%s, halted=%s",
            summary.succeeded,
            summary.failed,
            summary.halted,
        )
        return summary
