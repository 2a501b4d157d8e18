"""Raw-text editors for the Conan manifest and lock files.

- base.py: shared read/write and staged multi-file writes
- conandata.py: conandata.yml requirement items
- conanlock.py: conan.win.lock quoted lock entries
"""

from .base import MissingFilesError, TextFileEditor, write_files_staged  # noqa: F401
from .conandata import ConanDataEditor  # noqa: F401
from .conanlock import ConanLockEditor  # noqa: F401

__all__ = [
    "MissingFilesError",
    "TextFileEditor",
    "write_files_staged",
    "ConanDataEditor",
    "ConanLockEditor",
]
