# src/ingest/sources/github/client.py

import base64
from typing import Optional

from github import Github, GithubException, RateLimitExceededException, UnknownObjectException
from github.ContentFile import ContentFile
from github.Repository import Repository

from core.errors import ConfigurationError
from core.logging.logger import get_logger
from core.results import FailureReason, FetchResult
from ingest.mappers.github_repo_mapper import map_repo_metadata


RATE_LIMIT_STATUSES = (403, 429)


class GitHubClient:
    """
    Low-level GitHub API wrapper.
    Owns its token and retry policy; never raises for transport failures,
    every call returns a FetchResult instead.

    A record costs two requests: `get_repo` once, then `get_readme` on the
    fetched Repository. Metadata is read from the same Repository object.
    """

    def __init__(self, token: str, max_retries: int = 3):
        if not token:
            raise ConfigurationError("GitHub token is required")
        self.client = Github(token, per_page=50, retry=max_retries)
        self.logger = get_logger(__name__)

    def get_repo(self, full_name: str) -> FetchResult[Repository]:
        try:
            return FetchResult.success(self.client.get_repo(full_name))
        except Exception as e:
            return self._failure("repository", full_name, e)

    def get_readme(self, repo: Repository) -> FetchResult[str]:
        """
        Core API: README 콘텐츠 가져오기

        Args:
            repo: Repository returned by get_repo
        Returns:
            FetchResult with the decoded README text
        """
        try:
            readme: ContentFile = repo.get_readme()
            content = base64.b64decode(readme.content).decode("utf-8", errors="replace")
            return FetchResult.success(content)
        except Exception as e:
            return self._failure("README", repo.full_name, e)

    def get_repo_metadata(self, repo: Repository) -> dict:
        """Topics, counters and timestamps; no request beyond get_repo"""
        return map_repo_metadata(repo)

    def _failure(self, what: str, full_name: str, error: Exception) -> FetchResult:
        reason = classify_error(error)
        if reason is FailureReason.NOT_FOUND:
            self.logger.info(f"{what} not found for {full_name}")
        elif reason is FailureReason.RATE_LIMITED:
            self.logger.warning(f"Rate limit hit while fetching {what} for {full_name}")
        else:
            self.logger.error(f"Failed to get {what} for {full_name}: {error}")
        return FetchResult.fail(reason, str(error))


def classify_error(error: Exception) -> FailureReason:
    if isinstance(error, UnknownObjectException):
        return FailureReason.NOT_FOUND
    if isinstance(error, RateLimitExceededException):
        return FailureReason.RATE_LIMITED
    if isinstance(error, GithubException):
        status: Optional[int] = error.status
        if status == 404:
            return FailureReason.NOT_FOUND
        if status in RATE_LIMIT_STATUSES:
            return FailureReason.RATE_LIMITED
    return FailureReason.OTHER
