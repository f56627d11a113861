"""
Tests for version ordering
"""

import itertools

import pytest

from latest_tag.version_compare import compare_versions, looks_like_version, version_key


class TestLooksLikeVersion:
    """Test the version-like tag pattern."""

    @pytest.mark.parametrize("name", ["1.0", "v1.2.3", "r42", "2020-01-01", "v1-beta"])
    def test_version_like_names(self, name):
        assert looks_like_version(name)

    @pytest.mark.parametrize(
        "name", ["nightly", "release-1.0", "V1.0", "vv1.0", "x1", "", "latest"]
    )
    def test_other_names(self, name):
        assert not looks_like_version(name)


class TestCompareVersions:
    """Test version comparison."""

    def test_numeric_segments_compare_numerically(self):
        assert compare_versions("1.10.0", "1.9.0") == 1
        assert compare_versions("v2.0.0", "v10.0.0") == -1

    def test_prefix_is_ignored(self):
        assert compare_versions("v1.2.0", "1.1.9") == 1
        assert compare_versions("r3", "v2") == 1

    def test_longer_numeric_version_is_higher(self):
        assert compare_versions("1.0.1", "1.0") == 1
        assert compare_versions("1.0", "1.0.0") == -1

    def test_prerelease_is_lower_than_release(self):
        assert compare_versions("1.0.0-beta", "1.0.0") == -1
        assert compare_versions("1.0.0-rc.1", "1.0.0-beta.2") == 1

    def test_equal_strings(self):
        assert compare_versions("v1.2.3", "v1.2.3") == 0

    def test_distinct_strings_never_equal(self):
        assert compare_versions("v1.0", "1.0") != 0
        assert compare_versions("v1.0", "1.0") == -compare_versions("1.0", "v1.0")

    def test_total_order(self):
        """Antisymmetric and transitive over a mixed sample."""
        sample = [
            "1.0",
            "v1.0",
            "1.0.0",
            "1.0.0-alpha",
            "1.0.0-beta",
            "1.0.1",
            "r2",
            "2.0.0rc1",
            "10.0",
            "1.0.0+build",
        ]
        for a, b in itertools.product(sample, repeat=2):
            assert compare_versions(a, b) == -compare_versions(b, a)
        for a, b, c in itertools.product(sample, repeat=3):
            if compare_versions(a, b) < 0 and compare_versions(b, c) < 0:
                assert compare_versions(a, c) < 0

    def test_sort_key_matches_comparator(self):
        tags = ["v1.10.0", "v1.2.0", "v1.9.3", "v1.2.0-rc1"]
        assert sorted(tags, key=version_key) == [
            "v1.2.0-rc1",
            "v1.2.0",
            "v1.9.3",
            "v1.10.0",
        ]
