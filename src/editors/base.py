"""Shared file handling for the raw-text manifest and lock editors.

Editors never parse the files into a document tree: they read the whole
text, patch matched substrings, and write the whole text back, so unrelated
content is preserved byte for byte.
"""
from __future__ import annotations

import logging
import os
import tempfile
from typing import Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)


class MissingFilesError(FileNotFoundError):
    """Raised when one or more required files do not exist."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required files: {', '.join(self.missing)}")


class TextFileEditor:
    """Read/write helper bound to one file inside a working directory."""

    def __init__(self, working_directory: str, file_name: str):
        self.file_name = file_name
        self.file_path = os.path.join(working_directory, file_name)

    def exists(self) -> bool:
        return os.path.isfile(self.file_path)

    def read_content(self) -> str:
        """Return the whole file text.

        Raises:
            MissingFilesError: the file does not exist.
        """
        if not self.exists():
            raise MissingFilesError([self.file_name])
        # newline="" keeps CRLF line endings intact on round trip
        with open(self.file_path, "r", encoding="utf-8", newline="") as fh:
            return fh.read()

    def write_content(self, content: str) -> None:
        write_files_staged([(self.file_path, content)])
        logger.info("Updated %s", self.file_path)


def write_files_staged(files: Sequence[Tuple[str, str]]) -> None:
    """Write several files as one step.

    Every content is first written to a temporary sibling of its target;
    only when all temporaries are complete are they renamed over the
    targets, in the given order. A failure while writing leaves every
    target untouched; a failed rename removes the temporaries not yet
    renamed.
    """
    staged: List[Tuple[str, str]] = []
    try:
        for path, content in files:
            directory = os.path.dirname(os.path.abspath(path))
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory
            )
            staged.append((tmp_path, path))
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            if os.path.exists(path):
                os.chmod(tmp_path, os.stat(path).st_mode & 0o7777)
    except OSError:
        _remove_temporaries(tmp_path for tmp_path, _ in staged)
        raise

    for index, (tmp_path, path) in enumerate(staged):
        try:
            os.replace(tmp_path, path)
        except OSError:
            _remove_temporaries(tmp for tmp, _ in staged[index:])
            raise


def _remove_temporaries(paths: Iterable[str]) -> None:
    for tmp_path in paths:
        try:
            os.unlink(tmp_path)
        except OSError:
            logger.warning("Could not remove temporary file %s", tmp_path)
