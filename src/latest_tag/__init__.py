"""
Latest release tag button for GitHub repository pages
"""

from .cache import CacheEntry, InMemoryCache, JsonFileCache, memoize
from .config import Settings
from .data_models import Comparison, ComparisonStatus, RepoRef
from .divergence import DivergenceClassifier, classify_comparison
from .feature import LatestTagFeature
from .github_client import GitHubAPIError, GitHubClient
from .indicator import (
    BleedingEdgeIndicator,
    DisabledIndicator,
    LinkIndicator,
    build_indicator,
)
from .page_context import PageContext
from .tag_resolver import TagResolver, select_latest_tag
from .version_compare import compare_versions, looks_like_version, version_key

__all__ = [
    "BleedingEdgeIndicator",
    "CacheEntry",
    "Comparison",
    "ComparisonStatus",
    "DisabledIndicator",
    "DivergenceClassifier",
    "GitHubAPIError",
    "GitHubClient",
    "InMemoryCache",
    "JsonFileCache",
    "LatestTagFeature",
    "LinkIndicator",
    "PageContext",
    "RepoRef",
    "Settings",
    "TagResolver",
    "build_indicator",
    "classify_comparison",
    "compare_versions",
    "looks_like_version",
    "memoize",
    "select_latest_tag",
    "version_key",
]
