"""Tests for the conandata.yml editor."""

import pytest

from editors.base import MissingFilesError
from editors.conandata import ConanDataEditor, find_package_version, replace_package_version

CONANDATA = """\
requirements:
  - zterm/1.0.0.24
  - foobar/2.0
  - foo-bar/3.0
  - foo/1.0
build_requirements:
    -   foo/1.0
# - foo/0.1 commented out stays untouched
"""


class TestReplacePackageVersion:
    """Test the pure text replacement."""

    def test_replaces_matching_items(self):
        result = replace_package_version(CONANDATA, "foo", "1.1")

        assert result.count == 2
        assert "  - foo/1.1\n" in result.content
        assert "    -   foo/1.1\n" in result.content

    def test_name_boundary(self):
        result = replace_package_version(CONANDATA, "foo", "1.1")

        assert "  - foobar/2.0\n" in result.content
        assert "  - foo-bar/3.0\n" in result.content
        assert "# - foo/0.1 commented out" in result.content

    def test_unrelated_bytes_preserved(self):
        result = replace_package_version(CONANDATA, "zterm", "1.0.0.25")

        assert result.content == CONANDATA.replace("zterm/1.0.0.24", "zterm/1.0.0.25")

    def test_zero_matches_returns_same_text(self):
        result = replace_package_version(CONANDATA, "missing", "1.0")

        assert result.count == 0
        assert result.content == CONANDATA

    def test_regex_metacharacters_in_name(self):
        text = "  - a.b/1.0\n  - axb/1.0\n"

        result = replace_package_version(text, "a.b", "2.0")

        assert result.content == "  - a.b/2.0\n  - axb/1.0\n"

    def test_crlf_line_endings(self):
        text = "requirements:\r\n  - zterm/1.0\r\n"

        result = replace_package_version(text, "zterm", "1.1")

        assert result.content == "requirements:\r\n  - zterm/1.1\r\n"


class TestFindPackageVersion:
    """Test reading the current version."""

    def test_first_match(self):
        assert find_package_version(CONANDATA, "foo") == "1.0"

    def test_not_found(self):
        assert find_package_version(CONANDATA, "fo") is None


class TestConanDataEditor:
    """Test the file-bound editor."""

    def test_update_and_save(self, tmp_path):
        (tmp_path / "conandata.yml").write_text(CONANDATA, encoding="utf-8")
        editor = ConanDataEditor(str(tmp_path))

        result = editor.update_and_save("zterm", "1.0.0.25")

        assert result.count == 1
        assert editor.get_current_version("zterm") == "1.0.0.25"

    def test_update_without_save_leaves_file(self, tmp_path):
        (tmp_path / "conandata.yml").write_text(CONANDATA, encoding="utf-8")
        editor = ConanDataEditor(str(tmp_path))

        editor.update_package_version("zterm", "1.0.0.25")

        assert (tmp_path / "conandata.yml").read_text(encoding="utf-8") == CONANDATA

    def test_zero_matches_warns(self, tmp_path, caplog):
        (tmp_path / "conandata.yml").write_text(CONANDATA, encoding="utf-8")
        editor = ConanDataEditor(str(tmp_path))

        result = editor.update_package_version("missing", "1.0")

        assert result.count == 0
        assert "No references to package" in caplog.text

    def test_missing_file_raises(self, tmp_path):
        editor = ConanDataEditor(str(tmp_path))

        assert not editor.exists()
        with pytest.raises(MissingFilesError) as excinfo:
            editor.read_content()
        assert excinfo.value.missing == ["conandata.yml"]
        assert isinstance(excinfo.value, FileNotFoundError)

    def test_custom_file_name(self, tmp_path):
        (tmp_path / "deps.yml").write_text("  - zterm/1.0\n", encoding="utf-8")
        editor = ConanDataEditor(str(tmp_path), "deps.yml")

        assert editor.get_current_version("zterm") == "1.0"
