from typing import Optional

from radar.models import RepositoryRecord


def _first(item: dict, *keys, default=None):
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return default


def map_trending_repo(item: dict) -> Optional[RepositoryRecord]:
    """
    Extractor JSON item -> RepositoryRecord

    Accepts both the extractor's camelCase keys (starsAdded) and snake_case.
    Returns None when the item has no repository name.
    """
    name = _first(item, "name", "full_name")
    if not name:
        return None

    name = "/".join(part.strip() for part in str(name).split("/"))

    return RepositoryRecord(
        # --------------------
        # Identity
        # --------------------
        name=name,
        url=_first(item, "url", "html_url", default=f"https://github.com/{name}"),

        # --------------------
        # Text
        # --------------------
        language=_first(item, "language"),
        description=_first(item, "description"),

        # --------------------
        # Popularity
        # --------------------
        stars_added=int(_first(item, "starsAdded", "stars_added", default=0)),
        stars=int(_first(item, "stars", "stargazers_count", default=0)),
        forks=int(_first(item, "forks", "forks_count", default=0)),
    )
