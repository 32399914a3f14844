# src/radar/models.py

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class RepositoryRecord(BaseModel):
    """
    Trending repository as produced by the extractor. Never mutated.
    """

    model_config = ConfigDict(frozen=True)

    name: str  # owner/repo
    url: str
    language: Optional[str] = None
    description: Optional[str] = None
    stars_added: int = 0
    stars: int = 0
    forks: int = 0

    @property
    def owner(self) -> Optional[str]:
        owner, _, repo = self.name.partition("/")
        return owner if owner and repo else None

    @property
    def repo(self) -> Optional[str]:
        owner, _, repo = self.name.partition("/")
        return repo if owner and repo else None


class EnrichmentState(str, Enum):
    SKIPPED = "skipped"
    ENRICHED = "enriched"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


class EnrichedRecord(RepositoryRecord):
    # topics=None means "not fetched", () means "fetched, none set"
    enrichment: EnrichmentState = EnrichmentState.SKIPPED
    readme_content: Optional[str] = None
    topics: Optional[Tuple[str, ...]] = None

    stars_count: Optional[int] = None
    forks_count: Optional[int] = None
    watchers_count: Optional[int] = None
    open_issues_count: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_enriched(self) -> bool:
        return self.enrichment is EnrichmentState.ENRICHED


class ScoredRecord(EnrichedRecord):
    relevance_score: int = Field(default=0, ge=0)
    matched_keywords: Tuple[str, ...] = ()
    ai_summary: Optional[str] = None


class RunStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_input: int = 0
    total_filtered: int = 0
    total_analyzed: int = 0
    total_summarized: int = 0
    failed_batches: int = 0

    @property
    def omitted(self) -> int:
        """Filtered records lost to failed batches"""
        return self.total_filtered - self.total_analyzed


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: Tuple[ScoredRecord, ...] = ()
    stats: RunStats = Field(default_factory=RunStats)
