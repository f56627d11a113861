"""
Divergence between the default branch and the latest release tag
"""

import time
from collections.abc import Callable

from .cache import CacheService, memoize
from .config import Settings
from .data_models import Comparison, ComparisonStatus, RepoRef
from .github_client import GitHubClient
from .shared import get_logger, trace_function

logger = get_logger(__name__)


def classify_comparison(comparison: Comparison, default_branch: str) -> str | None:
    """
    Describe how far the default branch moved since the latest release.

    Returns None when the branch and the tag point at the same commit.
    """
    if comparison.status is ComparisonStatus.AHEAD:
        return (
            f"{default_branch} is {comparison.ahead_by} commits ahead "
            "of the latest release"
        )
    if comparison.status is ComparisonStatus.BEHIND:
        return (
            f"{default_branch} is {comparison.behind_by} commits behind "
            "the latest release"
        )
    if comparison.status is ComparisonStatus.DIVERGED:
        return (
            f"{default_branch} is {comparison.ahead_by} commits ahead, "
            f"{comparison.behind_by} commits behind the latest release"
        )
    return None


class DivergenceClassifier:
    """Builds and caches the "bleeding edge" message for a repository."""

    def __init__(
        self,
        client: GitHubClient,
        cache: CacheService,
        settings: Settings,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.bleeding_edge_message = memoize(
            cache,
            lambda repo, *args, **kwargs: settings.commits_cache_key(repo),
            settings.cache_ttl,
            clock=clock,
        )(self._fetch_message)

    @trace_function("divergence.fetch_message")
    def _fetch_message(
        self, repo: RepoRef, latest_tag: str, default_branch: str | None = None
    ) -> str | None:
        if default_branch is None:
            default_branch = self.client.get_default_branch(repo)

        comparison = self.client.compare(repo, latest_tag, default_branch)
        logger.debug(
            f"{repo}: {default_branch} vs {latest_tag} is {comparison.status.value}"
        )
        return classify_comparison(comparison, default_branch)
