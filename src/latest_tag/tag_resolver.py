"""
Latest release tag resolution
"""

import time
from collections.abc import Callable

from .cache import CacheService, memoize
from .config import Settings
from .data_models import RepoRef
from .github_client import GitHubClient
from .shared import get_logger, trace_function
from .version_compare import looks_like_version, version_key

logger = get_logger(__name__)


def select_latest_tag(tags: list[str]) -> str | None:
    """
    Pick the latest tag from candidates ordered newest tag commit first.

    If every name looks like a version, the highest version wins. Otherwise
    the names follow mixed conventions and the most recent tag is kept.
    """
    if not tags:
        return None

    if all(looks_like_version(tag) for tag in tags):
        return max(tags, key=version_key)

    return tags[0]


class TagResolver:
    """Resolves and caches the latest tag of a repository."""

    def __init__(
        self,
        client: GitHubClient,
        cache: CacheService,
        settings: Settings,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.settings = settings
        self.resolve_latest_tag = memoize(
            cache, settings.tags_cache_key, settings.cache_ttl, clock=clock
        )(self._fetch_latest_tag)

    @trace_function("tag_resolver.fetch_latest_tag")
    def _fetch_latest_tag(self, repo: RepoRef) -> str | None:
        tags = self.client.get_recent_tags(repo, self.settings.tag_candidate_limit)
        latest = select_latest_tag(tags)
        logger.debug(f"Resolved latest tag of {repo} from {len(tags)} candidates")
        return latest
