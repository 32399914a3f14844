# src/radar/scorer.py

import re
from typing import List, NamedTuple, Optional, Sequence, Tuple

from radar.models import EnrichedRecord, ScoredRecord


DESCRIPTION_WEIGHT = 5
README_WEIGHT = 1
TOPICS_WEIGHT = 3

SCORED_FIELDS = {"relevance_score", "matched_keywords", "ai_summary"}


class KeywordMatches(NamedTuple):
    score: int
    keywords: Tuple[str, ...]


def count_keyword(text: str, keyword: str) -> int:
    """
    Occurrences of keyword in text, case-insensitive.

    Takes the larger of the whole-word count and the substring count so that
    multi-word phrases ("LLM Agent") still register. Max, never the sum.
    """
    needle = keyword.strip().lower()
    if not text or not needle:
        return 0

    lowered = text.lower()
    pattern = re.escape(needle)
    exact = len(re.findall(rf"\b{pattern}\b", lowered))
    partial = len(re.findall(pattern, lowered))
    return max(exact, partial)


def find_keyword_matches(text: Optional[str], keywords: Sequence[str]) -> KeywordMatches:
    if not text or not keywords:
        return KeywordMatches(0, ())

    score = 0
    matched: List[str] = []
    for keyword in keywords:
        count = count_keyword(text, keyword)
        if count > 0:
            matched.append(keyword)
            score += count

    return KeywordMatches(score, tuple(matched))


def score_fields(
    description: Optional[str],
    readme_content: Optional[str],
    topics: Optional[Sequence[str]],
    keywords: Sequence[str],
) -> KeywordMatches:
    """
    Weighted relevance over description (x5), README (x1) and topics (x3).

    Matched keywords keep first-seen order: description, README, topics.
    """
    fields = (
        (description, DESCRIPTION_WEIGHT),
        (readme_content, README_WEIGHT),
        (" ".join(topics) if topics else None, TOPICS_WEIGHT),
    )

    total = 0
    matched: dict = {}
    for text, weight in fields:
        result = find_keyword_matches(text, keywords)
        total += result.score * weight
        for keyword in result.keywords:
            matched.setdefault(keyword, None)

    return KeywordMatches(total, tuple(matched))


def score_record(record: EnrichedRecord, keywords: Sequence[str]) -> ScoredRecord:
    """Score an enriched record; a ScoredRecord input is re-scored from scratch"""
    result = score_fields(
        record.description,
        record.readme_content,
        record.topics,
        keywords,
    )
    return ScoredRecord(
        **record.model_dump(exclude=SCORED_FIELDS),
        relevance_score=result.score,
        matched_keywords=result.keywords,
    )
