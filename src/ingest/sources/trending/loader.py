# src/ingest/sources/trending/loader.py

import json
from pathlib import Path
from typing import List

from core.errors import ConfigurationError
from core.logging.logger import get_logger
from ingest.mappers.trending_repo_mapper import map_trending_repo
from radar.models import RepositoryRecord

logger = get_logger(__name__)


def load_trending_repos(path: str) -> List[RepositoryRecord]:
    """
    Read the trending extractor's JSON output

    Args:
        path: JSON file holding an array of repository objects
    Returns:
        RepositoryRecords in file order
    Raises:
        ConfigurationError: file missing, unreadable, not JSON or not an array
    """
    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            items = json.load(handle)
    except OSError as e:
        raise ConfigurationError(f"Cannot read trending file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Trending file {path} is not valid JSON: {e}") from e

    if not isinstance(items, list):
        raise ConfigurationError(f"Trending file {path} must contain a JSON array")

    records = []
    for idx, item in enumerate(items):
        record = map_trending_repo(item)
        if record is None:
            logger.warning(f"Skipping trending item #{idx}: missing repository name")
            continue
        records.append(record)

    logger.info(f"Extracted {len(records)} trending repositories from {path}")
    return records
