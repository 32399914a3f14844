# src/radar/summarizer.py

import asyncio
from typing import Callable, Optional

from core.logging.logger import get_logger
from core.results import FailureReason, FetchResult
from radar.models import ScoredRecord


DEFAULT_QUOTA = 10
README_EXCERPT_CHARS = 500

SYSTEM_PROMPT = "You are a technical analyst that helps developers understand GitHub repositories."


def build_prompt(record: ScoredRecord) -> str:
    interests = ", ".join(record.matched_keywords)
    excerpt = (record.readme_content or "")[:README_EXCERPT_CHARS]
    return f"""Analyze this GitHub repository and provide a one-sentence summary explaining why it's relevant to these interests: {interests}.

Repository: {record.name}
Description: {record.description or 'No description'}
README Excerpt: {excerpt}

Focus on explaining the connection to the specified interests in a concise, informative way."""


class Summarizer:
    """
    Quota-bounded AI rationale generator.

    `issued` is the only mutable state of a run; the lock covers the whole
    check-generate-increment sequence so concurrent records cannot overshoot
    the quota.
    """

    def __init__(self, llm_client=None, quota: int = DEFAULT_QUOTA, enabled: bool = True):
        self.llm = llm_client
        self.quota = quota
        self.enabled = enabled and llm_client is not None
        self.issued = 0
        self.logger = get_logger(__name__)
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings, llm_factory: Callable) -> "Summarizer":
        logger = get_logger(__name__)
        if not settings.ENABLE_AI_SUMMARIES:
            logger.info("AI summaries disabled by configuration")
            return cls(None, quota=settings.MAX_AI_SUMMARIES, enabled=False)
        if not settings.OPENAI_API_KEY:
            logger.warning("OpenAI API key not found, AI summaries disabled")
            return cls(None, quota=settings.MAX_AI_SUMMARIES, enabled=False)

        logger.info("OpenAI API key detected, AI summaries enabled")
        return cls(llm_factory(), quota=settings.MAX_AI_SUMMARIES)

    @property
    def remaining(self) -> int:
        return max(self.quota - self.issued, 0)

    def reset(self):
        self.issued = 0

    async def summarize(self, record: ScoredRecord) -> Optional[str]:
        if not self.enabled or record.relevance_score <= 0:
            return None

        async with self._lock:
            if self.issued >= self.quota:
                return None

            result = await self._generate(record)
            if not result.ok:
                self.logger.error(f"Failed to generate AI summary for {record.name}: {result.message}")
                return None

            self.issued += 1
            return result.value

    async def _generate(self, record: ScoredRecord) -> FetchResult[str]:
        try:
            text = await self.llm.generate(build_prompt(record), system=SYSTEM_PROMPT)
        except Exception as e:
            return FetchResult.fail(FailureReason.OTHER, str(e))

        text = (text or "").strip()
        if not text:
            return FetchResult.fail(FailureReason.OTHER, "empty response")
        return FetchResult.success(text)
