# src/radar/enricher.py

import asyncio
from typing import List, Sequence

from core.logging.logger import get_logger
from core.results import FailureReason, FetchResult
from radar.models import EnrichedRecord, EnrichmentState, RepositoryRecord


README_MAX_CHARS = 5000

FAILURE_STATES = {
    FailureReason.NOT_FOUND: EnrichmentState.NOT_FOUND,
    FailureReason.RATE_LIMITED: EnrichmentState.RATE_LIMITED,
    FailureReason.OTHER: EnrichmentState.FAILED,
}


class ContentEnricher:
    """
    README와 repo metadata로 trending record를 보강

    Never raises: a failed lookup returns the original fields with the
    enrichment state set to the failure kind. Backing off after a rate limit
    is the orchestrator's job.
    """

    def __init__(self, client, readme_max_chars: int = README_MAX_CHARS):
        self.client = client
        self.readme_max_chars = readme_max_chars
        self.logger = get_logger(__name__)

    async def enrich_batch(self, records: Sequence[RepositoryRecord]) -> List[EnrichedRecord]:
        return [await self.enrich(record) for record in records]

    async def enrich(self, record: RepositoryRecord) -> EnrichedRecord:
        if record.owner is None:
            self.logger.info(f"Invalid repo name format: {record.name}")
            return self._degraded(record, EnrichmentState.SKIPPED)

        try:
            repo = await asyncio.to_thread(self.client.get_repo, record.name)
            if not repo.ok:
                return self._degraded(record, FAILURE_STATES[repo.failure])

            readme = await asyncio.to_thread(self.client.get_readme, repo.value)
            if not readme.ok and readme.failure is not FailureReason.NOT_FOUND:
                return self._degraded(record, FAILURE_STATES[readme.failure])

            metadata = self.client.get_repo_metadata(repo.value)
            return self._enriched(record, readme, metadata)

        except Exception as e:
            self.logger.error(f"Error enriching {record.name}: {e}", exc_info=True)
            return self._degraded(record, EnrichmentState.FAILED)

    def truncate(self, content: str) -> str:
        return content[: self.readme_max_chars]

    def _enriched(self, record: RepositoryRecord, readme: FetchResult, metadata: dict) -> EnrichedRecord:
        readme_content = self.truncate(readme.value) if readme.ok and readme.value is not None else None

        return EnrichedRecord(
            **record.model_dump(),
            enrichment=EnrichmentState.ENRICHED,
            readme_content=readme_content,
            topics=tuple(metadata.get("topics") or ()),
            stars_count=metadata.get("stargazers_count"),
            forks_count=metadata.get("forks_count"),
            watchers_count=metadata.get("watchers_count"),
            open_issues_count=metadata.get("open_issues_count"),
            created_at=metadata.get("created_at"),
            updated_at=metadata.get("updated_at"),
        )

    def _degraded(self, record: RepositoryRecord, state: EnrichmentState) -> EnrichedRecord:
        if state is not EnrichmentState.SKIPPED:
            self.logger.warning(f"Enrichment degraded for {record.name}: {state.value}")
        return EnrichedRecord(**record.model_dump(), enrichment=state)
