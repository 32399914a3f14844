# src/radar/language_filter.py

from typing import Dict, Iterable, List, Sequence

from core.logging.logger import get_logger
from radar.models import RepositoryRecord

logger = get_logger(__name__)


def filter_by_language(
    records: Sequence[RepositoryRecord],
    target_languages: Iterable[str],
) -> List[RepositoryRecord]:
    """
    Keep records whose language is one of target_languages (case-insensitive).

    An empty target set means "monitor all languages" and returns every record.
    """
    targets = {lang.lower() for lang in target_languages if lang}

    if not targets:
        logger.info("No target languages specified, returning all repositories")
        return list(records)

    filtered = [
        record for record in records
        if record.language and record.language.lower() in targets
    ]
    logger.info(
        f"Language filter: {len(filtered)} of {len(records)} repositories match target languages"
    )
    return filtered


def language_stats(records: Iterable[RepositoryRecord]) -> Dict[str, int]:
    stats: Dict[str, int] = {}
    for record in records:
        lang = record.language or "Unknown"
        stats[lang] = stats.get(lang, 0) + 1
    return stats
