def map_repo_metadata(repo) -> dict:
    """
    PyGithub Repository -> metadata consumed by the content enricher
    """
    return {
        # --------------------
        # Topics
        # --------------------
        "topics": list(repo.topics or []),

        # --------------------
        # Signals (counters)
        # --------------------
        "stargazers_count": repo.stargazers_count,
        "forks_count": repo.forks_count,
        "watchers_count": repo.watchers_count,
        "open_issues_count": repo.open_issues_count,

        # --------------------
        # Activity (time-based facts)
        # --------------------
        "created_at": repo.created_at,
        "updated_at": repo.updated_at,
    }
