"""Editor for the ``conan.win.lock`` lock file.

Lock entries are quoted JSON strings ``"<name>/<version>#<revision>%<timestamp>"``.
Each matched entry is replaced as a whole by a freshly built one; no field of
the old entry is carried over.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from constants import Constants
from versioning.grammar import MalformedReferenceError, build_lock_entry, parse_lock_entry
from versioning.models import EditResult, LockEntry
from .base import TextFileEditor

logger = logging.getLogger(__name__)


def _entry_pattern(package_name: str) -> "re.Pattern[str]":
    return re.compile(rf'"({re.escape(package_name)}/[^#"\s]+#[^%"\s]+%[^"\s]+)"')


def replace_lock_entries(
    content: str, package_name: str, new_version: str, new_revision: str, new_timestamp: str
) -> EditResult:
    """Replace every lock entry of ``package_name`` in ``content``."""
    count = 0
    new_entry = build_lock_entry(f"{package_name}/{new_version}", new_revision, new_timestamp)

    def _replace(m: "re.Match[str]") -> str:
        nonlocal count
        try:
            parse_lock_entry(m.group(1))
        except MalformedReferenceError:
            return m.group(0)
        count += 1
        return f'"{new_entry}"'

    updated = _entry_pattern(package_name).sub(_replace, content)
    return EditResult(content=updated, count=count)


def find_lock_entry(content: str, package_name: str) -> Optional[LockEntry]:
    """Return the first lock entry of ``package_name`` in ``content``."""
    m = _entry_pattern(package_name).search(content)
    if not m:
        return None
    try:
        return parse_lock_entry(m.group(1))
    except MalformedReferenceError:
        return None


class ConanLockEditor(TextFileEditor):
    """Read and patch lock entries in conan.win.lock."""

    def __init__(self, working_directory: str = ".", file_name: str = Constants.LOCK_FILE):
        super().__init__(working_directory, file_name)

    def update_package_version(
        self, package_name: str, new_version: str, new_revision: str, new_timestamp: str
    ) -> EditResult:
        """Return the updated file text and the number of replaced entries."""
        result = replace_lock_entries(
            self.read_content(), package_name, new_version, new_revision, new_timestamp
        )
        if result.count == 0:
            logger.warning('No lock entries for package "%s" found in %s', package_name, self.file_name)
        else:
            logger.info("Updated %d lock entries for %s in %s", result.count, package_name, self.file_name)
        return result

    def update_and_save(
        self, package_name: str, new_version: str, new_revision: str, new_timestamp: str
    ) -> EditResult:
        result = self.update_package_version(package_name, new_version, new_revision, new_timestamp)
        self.write_content(result.content)
        return result

    def get_current_lock_info(self, package_name: str) -> Optional[LockEntry]:
        return find_lock_entry(self.read_content(), package_name)
