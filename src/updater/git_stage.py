"""Stage updated files with git after a successful reconciliation."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class GitStageError(RuntimeError):
    """Raised when ``git add`` exits with a non-zero status."""


def stage_files(paths: Sequence[str], cwd: Optional[str] = None) -> None:
    """Run ``git add`` for ``paths`` inside ``cwd``."""
    logger.info("Staging updated files: %s", ", ".join(paths))
    result = subprocess.run(
        ["git", "add", "--", *paths],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise GitStageError(result.stderr.strip() or f"git add exited with {result.returncode}")
    logger.info("All files staged successfully")
