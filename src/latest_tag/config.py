"""
Configuration for the latest-tag indicator
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

# Namespace prefixed to every cache key owned by this feature
FEATURE_NAME = "latest-tag-button"

# GraphQL window of candidate tags, most recent tag commit first
TAG_CANDIDATE_LIMIT = 20

CACHE_TTL = timedelta(days=1)

DEFAULT_API_URL = "https://api.github.com"


def graphql_url_for(api_url: str) -> str:
    """GraphQL endpoint next to a REST base URL.

    GitHub Enterprise serves REST under /api/v3 and GraphQL under /api/graphql.
    """
    api_url = api_url.rstrip("/")
    if api_url.endswith("/api/v3"):
        return api_url[: -len("/v3")] + "/graphql"
    return api_url + "/graphql"


def _default_cache_dir() -> Path:
    xdg = os.environ.get("XDG_CACHE_HOME", "")
    if xdg:
        return Path(xdg) / "latest-tag"
    return Path.home() / ".cache" / "latest-tag"


@dataclass
class Settings:
    """Runtime settings for the resolver, the classifier and the client."""

    github_token: str | None = None
    api_url: str = DEFAULT_API_URL
    graphql_url: str | None = None
    cache_dir: Path = field(default_factory=_default_cache_dir)
    cache_ttl: timedelta = CACHE_TTL
    feature_name: str = FEATURE_NAME
    tag_candidate_limit: int = TAG_CANDIDATE_LIMIT
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (after load_dotenv)."""
        settings = cls(
            github_token=os.environ.get("GITHUB_TOKEN") or None,
            api_url=os.environ.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
            graphql_url=os.environ.get("GITHUB_GRAPHQL_URL") or None,
        )

        cache_dir = os.environ.get("LATEST_TAG_CACHE_DIR", "")
        if cache_dir:
            settings.cache_dir = Path(cache_dir).expanduser()

        timeout = os.environ.get("LATEST_TAG_REQUEST_TIMEOUT", "")
        if timeout:
            try:
                settings.request_timeout = float(timeout)
            except ValueError as e:
                raise ValueError(
                    f"LATEST_TAG_REQUEST_TIMEOUT must be a number, got '{timeout}'"
                ) from e

        return settings

    def tags_cache_key(self, repo: object) -> str:
        """Cache key for the resolved latest tag of a repository."""
        return f"{self.feature_name}_tags:{repo}"

    def commits_cache_key(self, repo: object) -> str:
        """Cache key for the bleeding-edge message of a repository."""
        return f"{self.feature_name}_commits:{repo}"
