"""Tests for the conan.win.lock editor."""

import pytest

from editors.base import MissingFilesError
from editors.conanlock import ConanLockEditor, find_lock_entry, replace_lock_entries
from versioning.models import LockEntry

LOCK = """\
{
    "version": "0.5",
    "requires": [
        "zterm/1.0.0.24#9bbcb882c9c62af94fcfd21f98e3b711%1756995353.576",
        "foobar/2.0#1111%1700000000.000",
        "foo-bar/3.0#2222%1700000000.000",
        "foo/1.0#3333%1700000000.000"
    ],
    "build_requires": [
        "foo/1.0#3333%1700000000.000"
    ],
    "python_requires": [],
    "config_requires": []
}
"""


class TestReplaceLockEntries:
    """Test the pure text replacement."""

    def test_replaces_all_entries_of_package(self):
        result = replace_lock_entries(LOCK, "foo", "1.1", "4444", "1757090078.826")

        assert result.count == 2
        assert result.content.count('"foo/1.1#4444%1757090078.826"') == 2
        assert "foo/1.0#" not in result.content

    def test_name_boundary(self):
        result = replace_lock_entries(LOCK, "foo", "1.1", "4444", "1757090078.826")

        assert '"foobar/2.0#1111%1700000000.000"' in result.content
        assert '"foo-bar/3.0#2222%1700000000.000"' in result.content

    def test_unrelated_bytes_preserved(self):
        result = replace_lock_entries(LOCK, "zterm", "1.0.0.25", "abc", "1757090078.826")

        expected = LOCK.replace(
            "zterm/1.0.0.24#9bbcb882c9c62af94fcfd21f98e3b711%1756995353.576",
            "zterm/1.0.0.25#abc%1757090078.826",
        )
        assert result.content == expected

    def test_entry_with_user_channel_is_rebuilt(self):
        text = '["winusb/2.1@xxx/stable#old%1.000"]'

        result = replace_lock_entries(text, "winusb", "2.2", "new", "2.000")

        assert result.content == '["winusb/2.2#new%2.000"]'

    def test_zero_matches(self):
        result = replace_lock_entries(LOCK, "missing", "1.0", "x", "1.000")

        assert result.count == 0
        assert result.content == LOCK

    def test_unquoted_text_not_touched(self):
        text = 'foo/1.0#3333%1700000000.000\n"foo/1.0#3333%1700000000.000"'

        result = replace_lock_entries(text, "foo", "2.0", "x", "1.000")

        assert result.content == 'foo/1.0#3333%1700000000.000\n"foo/2.0#x%1.000"'


class TestFindLockEntry:
    """Test reading the current lock entry."""

    def test_first_entry(self):
        assert find_lock_entry(LOCK, "zterm") == LockEntry(
            package_ref="zterm/1.0.0.24",
            revision_hash="9bbcb882c9c62af94fcfd21f98e3b711",
            timestamp="1756995353.576",
        )

    def test_not_found(self):
        assert find_lock_entry(LOCK, "foob") is None


class TestConanLockEditor:
    """Test the file-bound editor."""

    def test_update_and_save(self, tmp_path):
        (tmp_path / "conan.win.lock").write_text(LOCK, encoding="utf-8")
        editor = ConanLockEditor(str(tmp_path))

        result = editor.update_and_save("zterm", "1.0.0.25", "abc", "1757090078.826")

        assert result.count == 1
        current = editor.get_current_lock_info("zterm")
        assert current.package_ref == "zterm/1.0.0.25"
        assert current.revision_hash == "abc"
        assert current.timestamp == "1757090078.826"

    def test_zero_matches_warns(self, tmp_path, caplog):
        (tmp_path / "conan.win.lock").write_text(LOCK, encoding="utf-8")
        editor = ConanLockEditor(str(tmp_path))

        editor.update_package_version("missing", "1.0", "x", "1.000")

        assert "No lock entries for package" in caplog.text

    def test_missing_file_raises(self, tmp_path):
        editor = ConanLockEditor(str(tmp_path))

        with pytest.raises(MissingFilesError) as excinfo:
            editor.get_current_lock_info("zterm")
        assert excinfo.value.missing == ["conan.win.lock"]
