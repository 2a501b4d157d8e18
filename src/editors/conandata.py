"""Editor for the ``conandata.yml`` manifest.

Requirements are list items of the form ``  - <name>/<version>``. Only the
lines naming the target package are rewritten; indentation and the list
marker are preserved.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from constants import Constants
from versioning.models import EditResult
from .base import TextFileEditor

logger = logging.getLogger(__name__)


def _item_pattern(package_name: str) -> "re.Pattern[str]":
    # "/" after the name anchors it, so "foo" never matches "foobar/" or "foo-bar/"
    return re.compile(rf'^([ \t]*-[ \t]+){re.escape(package_name)}/(\S+)', re.MULTILINE)


def replace_package_version(content: str, package_name: str, new_version: str) -> EditResult:
    """Rewrite every ``- <package_name>/...`` item in ``content`` to ``new_version``."""
    pattern = _item_pattern(package_name)
    updated, count = pattern.subn(
        lambda m: f"{m.group(1)}{package_name}/{new_version}", content
    )
    return EditResult(content=updated, count=count)


def find_package_version(content: str, package_name: str) -> Optional[str]:
    """Return the version of the first ``- <package_name>/<version>`` item."""
    m = _item_pattern(package_name).search(content)
    return m.group(2) if m else None


class ConanDataEditor(TextFileEditor):
    """Read and patch package versions in conandata.yml."""

    def __init__(self, working_directory: str = ".", file_name: str = Constants.MANIFEST_FILE):
        super().__init__(working_directory, file_name)

    def update_package_version(self, package_name: str, new_version: str) -> EditResult:
        """Return the updated file text and the number of replaced items."""
        result = replace_package_version(self.read_content(), package_name, new_version)
        if result.count == 0:
            logger.warning('No references to package "%s" found in %s', package_name, self.file_name)
        else:
            logger.info("Updated %d references to %s in %s", result.count, package_name, self.file_name)
        return result

    def update_and_save(self, package_name: str, new_version: str) -> EditResult:
        result = self.update_package_version(package_name, new_version)
        self.write_content(result.content)
        return result

    def get_current_version(self, package_name: str) -> Optional[str]:
        return find_package_version(self.read_content(), package_name)
