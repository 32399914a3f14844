# src/radar/pipeline.py

import asyncio
from enum import Enum
from typing import Iterable, List, Sequence

from core.errors import ConfigurationError
from core.logging.logger import get_logger
from radar.batching import BatchSequence
from radar.language_filter import filter_by_language
from radar.models import (
    AnalysisResult,
    EnrichmentState,
    RepositoryRecord,
    RunStats,
    ScoredRecord,
)
from radar.scorer import score_record


class RunState(str, Enum):
    IDLE = "idle"
    FILTERING = "filtering"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


class RadarPipeline:
    """
    Filter -> batches of (Enrich -> Score -> maybe-Summarize) -> AnalysisResult

    Batches run one after another with a delay in between; records inside a
    batch run concurrently. A failing batch is logged and dropped, the run
    carries on. Only invalid configuration aborts, and only before any batch.
    """

    def __init__(
        self,
        enricher,
        summarizer,
        target_languages: Sequence[str] = (),
        keywords: Sequence[str] = (),
        batch_size: int = 5,
        batch_delay: float = 1.0,
        rate_limit_backoff: float = 60.0,
    ):
        self.enricher = enricher
        self.summarizer = summarizer
        self.target_languages = list(target_languages)
        self.keywords = list(keywords)
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.rate_limit_backoff = rate_limit_backoff
        self.state = RunState.IDLE
        self.logger = get_logger(__name__)

    def _check_configuration(self):
        if self.batch_size < 1:
            raise ConfigurationError(f"Batch size must be at least 1 (got {self.batch_size})")
        if self.batch_delay < 0 or self.rate_limit_backoff < 0:
            raise ConfigurationError("Batch delay and rate limit backoff must not be negative")

    async def run(self, records: Iterable[RepositoryRecord]) -> AnalysisResult:
        self.state = RunState.IDLE
        records = list(records)

        try:
            self._check_configuration()
        except ConfigurationError:
            self.state = RunState.FAILED
            raise

        self.summarizer.reset()
        self.logger.info(f"🧠 Analyzing {len(records)} repositories...")

        self.state = RunState.FILTERING
        filtered = filter_by_language(records, self.target_languages)

        self.state = RunState.PROCESSING
        batches = BatchSequence(filtered, self.batch_size)
        analyzed: List[ScoredRecord] = []
        failed_batches = 0

        for idx, batch in enumerate(batches, start=1):
            self.logger.info(f"Processing batch {idx}/{len(batches)}...")
            rate_limited = False
            try:
                scored = await self._process_batch(batch)
                analyzed.extend(scored)
                rate_limited = any(r.enrichment is EnrichmentState.RATE_LIMITED for r in scored)
            except Exception as e:
                failed_batches += 1
                self.logger.error(
                    f"Batch {idx} failed, {len(batch)} repositories omitted: {e}",
                    exc_info=True,
                )

            if idx < len(batches):
                await asyncio.sleep(self._delay_after(rate_limited))

        ranked = sorted(analyzed, key=lambda r: r.relevance_score, reverse=True)
        stats = RunStats(
            total_input=len(records),
            total_filtered=len(filtered),
            total_analyzed=len(analyzed),
            total_summarized=sum(1 for r in analyzed if r.ai_summary),
            failed_batches=failed_batches,
        )

        self.state = RunState.DONE
        self.logger.info(
            f"✅ Analysis complete: {stats.total_analyzed}/{stats.total_filtered} repositories analyzed "
            f"({stats.total_summarized} summarized, {stats.failed_batches} failed batches)"
        )
        return AnalysisResult(records=tuple(ranked), stats=stats)

    def _delay_after(self, rate_limited: bool) -> float:
        if rate_limited:
            self.logger.warning(
                f"Rate limit hit during batch. Backing off {self.rate_limit_backoff:.0f} seconds..."
            )
            return max(self.batch_delay, self.rate_limit_backoff)
        return self.batch_delay

    async def _process_batch(self, batch: Sequence[RepositoryRecord]) -> List[ScoredRecord]:
        """
        Enrich and score every record concurrently, then summarize.

        Summaries start only once the whole batch is scored, so a failing batch
        never spends quota on records it drops. When one record raises, its
        siblings are cancelled and awaited before the error propagates.
        """
        tasks = [asyncio.create_task(self._score_record(record)) for record in batch]
        try:
            scored = list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return [await self._summarize_record(record) for record in scored]

    async def _score_record(self, record: RepositoryRecord) -> ScoredRecord:
        enriched = await self.enricher.enrich(record)
        return score_record(enriched, self.keywords)

    async def _summarize_record(self, scored: ScoredRecord) -> ScoredRecord:
        summary = await self.summarizer.summarize(scored)
        if summary is None:
            return scored
        return scored.model_copy(update={"ai_summary": summary})
