"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import Mock

import pytest

from latest_tag.cache import InMemoryCache
from latest_tag.config import Settings
from latest_tag.data_models import Comparison, ComparisonStatus, RepoRef
from latest_tag.github_client import GitHubClient


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repo():
    return RepoRef(owner="owner", name="repo")


@pytest.fixture
def settings(tmp_path):
    """Settings that never touch the user's cache directory."""
    return Settings(github_token="test-token", cache_dir=tmp_path / "cache")


@pytest.fixture
def memory_cache():
    return InMemoryCache()


@pytest.fixture
def mock_client():
    """GitHub client double with a tagged repository."""
    client = Mock(spec=GitHubClient)
    client.get_recent_tags.return_value = ["v1.0.0", "v1.2.0", "v1.1.0"]
    client.get_default_branch.return_value = "main"
    client.compare.return_value = Comparison(
        status=ComparisonStatus.IDENTICAL, ahead_by=0, behind_by=0
    )
    return client
