"""
End-to-end tests for the latest tag button feature
"""

from unittest.mock import Mock, patch

import pytest

from latest_tag import version_compare
from latest_tag.data_models import Comparison, ComparisonStatus
from latest_tag.divergence import DivergenceClassifier
from latest_tag.feature import LatestTagFeature
from latest_tag.github_client import GitHubAPIError
from latest_tag.indicator import BleedingEdgeIndicator, DisabledIndicator, LinkIndicator
from latest_tag.page_context import PageContext
from latest_tag.tag_resolver import TagResolver


@pytest.fixture
def feature(mock_client, memory_cache, settings, clock):
    resolver = TagResolver(mock_client, memory_cache, settings, clock=clock)
    classifier = DivergenceClassifier(mock_client, memory_cache, settings, clock=clock)
    return LatestTagFeature(resolver, classifier)


class TestAppliesTo:
    """Test which pages get the button."""

    def test_tree_and_file_views(self):
        assert LatestTagFeature.applies_to(
            PageContext.from_url("/owner/repo", default_branch="main")
        )
        assert LatestTagFeature.applies_to(PageContext.from_url("/o/r/tree/main/src"))
        assert LatestTagFeature.applies_to(PageContext.from_url("/o/r/blob/main/a.py"))

    def test_other_views(self):
        page = PageContext.from_url("/o/r/issues", current_branch="main")
        assert not LatestTagFeature.applies_to(page)


class TestInit:
    """Test the activation entry point."""

    def test_version_like_tags_resolve_to_highest(self, feature, mock_client):
        mock_client.get_recent_tags.return_value = ["v1.0.0", "v1.2.0", "v1.1.0"]
        anchor = Mock()
        page = PageContext.from_url("/owner/repo", default_branch="main")

        decision = feature.init(page, anchor)

        assert decision == LinkIndicator(href="/owner/repo/tree/v1.2.0", tag="v1.2.0")
        anchor.insert_before.assert_called_once_with(decision)
        mock_client.compare.assert_not_called()

    def test_mixed_tags_resolve_to_most_recent(self, feature, mock_client):
        mock_client.get_recent_tags.return_value = ["nightly", "v1.0.0"]
        page = PageContext.from_url("/owner/repo/tree/main/docs")

        with patch(
            "latest_tag.tag_resolver.version_key", wraps=version_compare.version_key
        ) as mock_key:
            decision = feature.init(page, Mock())

        assert decision.tag == "nightly"
        assert decision.href == "/owner/repo/tree/nightly/docs"
        mock_key.assert_not_called()

    def test_bleeding_edge_on_latest_tag(self, feature, mock_client):
        mock_client.get_recent_tags.return_value = ["v2.0.0", "v1.0.0"]
        mock_client.compare.return_value = Comparison(ComparisonStatus.AHEAD, 3, 0)
        page = PageContext.from_url("/owner/repo/tree/v2.0.0/src")

        decision = feature.init(page, Mock())

        assert decision == BleedingEdgeIndicator(
            label="main is 3 commits ahead of the latest release", tag="v2.0.0"
        )
        mock_client.compare.assert_called_once_with(page.repo, "v2.0.0", "main")

    def test_disabled_on_latest_tag_without_changes(self, feature, mock_client):
        mock_client.get_recent_tags.return_value = ["v2.0.0"]
        mock_client.compare.return_value = Comparison(ComparisonStatus.IDENTICAL)
        page = PageContext.from_url(
            "/owner/repo/blob/v2.0.0/README.md", default_branch="main"
        )

        decision = feature.init(page, Mock())

        assert decision == DisabledIndicator()
        mock_client.get_default_branch.assert_not_called()

    def test_link_replaces_branch_in_file_path(self, feature, mock_client):
        mock_client.get_recent_tags.return_value = ["v2.0.0"]
        page = PageContext.from_url("/owner/repo/blob/feature-x/file.txt")

        decision = feature.init(page, Mock())

        assert decision == LinkIndicator(
            href="/owner/repo/blob/v2.0.0/file.txt", tag="v2.0.0"
        )

    def test_no_tags_is_a_no_op(self, feature, mock_client):
        mock_client.get_recent_tags.return_value = []
        anchor = Mock()
        page = PageContext.from_url("/owner/repo/tree/main")

        assert feature.init(page, anchor) is None
        anchor.insert_before.assert_not_called()
        mock_client.compare.assert_not_called()
        mock_client.get_default_branch.assert_not_called()

    def test_missing_anchor_is_a_no_op(self, feature, mock_client):
        page = PageContext.from_url("/owner/repo/tree/v1.2.0")

        assert feature.init(page, lambda: None) is None
        mock_client.compare.assert_not_called()

    def test_anchor_provider_is_called(self, feature):
        anchor = Mock()
        page = PageContext.from_url("/owner/repo/tree/main")

        decision = feature.init(page, lambda: anchor)

        anchor.insert_before.assert_called_once_with(decision)

    def test_repeated_views_hit_the_cache(self, feature, mock_client):
        mock_client.compare.return_value = Comparison(ComparisonStatus.BEHIND, 0, 1)
        page = PageContext.from_url("/owner/repo/tree/v1.2.0")

        first = feature.init(page, Mock())
        second = feature.init(page, Mock())

        assert first == second
        assert mock_client.get_recent_tags.call_count == 1
        assert mock_client.compare.call_count == 1
        assert mock_client.get_default_branch.call_count == 1

    def test_remote_failure_propagates(self, feature, mock_client):
        mock_client.get_recent_tags.side_effect = GitHubAPIError("unavailable")
        anchor = Mock()

        with pytest.raises(GitHubAPIError):
            feature.init(PageContext.from_url("/owner/repo/tree/main"), anchor)
        anchor.insert_before.assert_not_called()
