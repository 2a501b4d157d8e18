"""Tests for the token-wise version ordering."""

import pytest

from versioning.compare import compare_versions, sort_versions_desc


class TestCompareVersions:
    """Test pairwise comparisons."""

    def test_numeric_tokens_compare_numerically(self):
        assert compare_versions("1.0.10", "1.0.2") > 0
        assert compare_versions("1.0.2", "1.0.10") < 0

    def test_equal_versions(self):
        assert compare_versions("1.0.0.25", "1.0.0.25") == 0

    def test_missing_trailing_tokens_are_zero(self):
        assert compare_versions("1.0", "1.0.0") == 0
        assert compare_versions("1.0.1", "1.0") > 0

    def test_numeric_ranks_above_string_token(self):
        assert compare_versions("1.0.0", "1.0.0-beta") > 0
        assert compare_versions("1.0.0-beta", "1.0.0") < 0

    def test_string_tokens_use_collation(self):
        assert compare_versions("1.0.0-beta", "1.0.0-alpha") > 0
        assert compare_versions("1.0.0-rc", "1.0.0-beta") > 0

    def test_collation_ignores_case(self):
        assert compare_versions("1.0-RC", "1.0-beta") > 0
        assert compare_versions("1.0-Beta", "1.0-alpha") > 0
        assert compare_versions("1.0-ALPHA", "1.0-beta") < 0

    def test_lowercase_first_when_only_case_differs(self):
        assert compare_versions("1.0-RC", "1.0-rc") > 0
        assert compare_versions("1.0-rc", "1.0-RC") < 0

    def test_digit_led_token_sorts_before_letters(self):
        assert compare_versions("1.0-2b", "1.0-rc") < 0
        assert compare_versions("1.0-rc", "1.0-2b") > 0

    def test_dash_and_dot_are_both_separators(self):
        assert compare_versions("1-2-3", "1.2.3") == 0

    def test_first_difference_decides(self):
        assert compare_versions("2.0", "1.99.99") > 0


class TestSortVersionsDesc:
    """Test newest-first sorting."""

    def test_documented_ordering(self):
        result = sort_versions_desc(["1.0.0", "1.0.10", "1.0.2", "1.0.0-beta"])

        assert result == ["1.0.10", "1.0.2", "1.0.0", "1.0.0-beta"]

    def test_mixed_case_suffixes(self):
        result = sort_versions_desc(["1.0-beta", "1.0-RC", "1.0-alpha"])

        assert result == ["1.0-RC", "1.0-beta", "1.0-alpha"]

    def test_four_part_versions(self):
        result = sort_versions_desc(["1.0.0.9", "1.0.0.25", "1.0.0.24", "0.9.9.99"])

        assert result == ["1.0.0.25", "1.0.0.24", "1.0.0.9", "0.9.9.99"]

    def test_key_function(self):
        items = [{"v": "1.2"}, {"v": "1.10"}, {"v": "1.3"}]

        result = sort_versions_desc(items, key=lambda i: i["v"])

        assert [i["v"] for i in result] == ["1.10", "1.3", "1.2"]

    @pytest.mark.parametrize("versions", [[], ["1.0"]])
    def test_trivial_inputs(self, versions):
        assert sort_versions_desc(versions) == versions
