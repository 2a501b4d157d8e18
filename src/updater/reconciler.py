"""Reconcile conandata.yml and conan.win.lock with the registry.

Per package and invocation the flow is Validate -> Resolve -> Compare ->
(NoOp | Apply). The returned CompletePackageInfo (or None) tells callers
whether anything was written and downstream staging/commit should run.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from editors.base import MissingFilesError, write_files_staged
from editors.conandata import ConanDataEditor
from editors.conanlock import ConanLockEditor
from versioning.models import CompletePackageInfo, UpdateDecision
from versioning.service import ConanPackageService

logger = logging.getLogger(__name__)


class ReconcileOutcome(Enum):
    """Why the last reconcile call returned what it did."""

    UNRESOLVED = "unresolved"
    UNTRACKED = "untracked"
    UP_TO_DATE = "up_to_date"
    DRY_RUN = "dry_run"
    UPDATED = "updated"


class PackageReconciler:
    """Decide whether a package needs updating and apply the edit to both files."""

    def __init__(
        self,
        package_service: ConanPackageService,
        manifest: ConanDataEditor,
        lock: ConanLockEditor,
    ):
        self.package_service = package_service
        self.manifest = manifest
        self.lock = lock
        self.last_outcome: Optional[ReconcileOutcome] = None

    @property
    def files(self) -> List[str]:
        return [self.manifest.file_path, self.lock.file_path]

    def validate_files(self) -> None:
        """Raise MissingFilesError naming every required file that is absent."""
        missing = [e.file_name for e in (self.manifest, self.lock) if not e.exists()]
        if missing:
            raise MissingFilesError(missing)

    def resolve_latest(self, remote: str, package_name: str) -> Optional[CompletePackageInfo]:
        return self.package_service.resolve_latest(remote, package_name)

    def check_update(self, package_name: str, info: CompletePackageInfo) -> UpdateDecision:
        """Compare the files on disk against ``info``."""
        current_version = self.manifest.get_current_version(package_name)
        current_lock = self.lock.get_current_lock_info(package_name)
        decision = UpdateDecision(
            current_version=current_version,
            current_lock=current_lock,
            version_mismatch=current_version != info.version,
            revision_mismatch=(current_lock.revision_hash if current_lock else None) != info.revision_hash,
            package_ref_mismatch=(
                (current_lock.package_ref if current_lock else None) != f"{package_name}/{info.version}"
            ),
        )

        logger.info(
            "Current state of %s: %s=%s, %s=%s (revision %s); latest %s/%s (revision %s)",
            package_name,
            self.manifest.file_name,
            current_version or "not found",
            self.lock.file_name,
            current_lock.package_ref if current_lock else "not found",
            current_lock.revision_hash if current_lock else "not found",
            package_name,
            info.version,
            info.revision_hash,
        )
        if not decision.tracked:
            logger.warning("Package %s not found in either file", package_name)
        elif decision.needs_update:
            if decision.version_mismatch:
                logger.info("Version: %s -> %s", current_version, info.version)
            if decision.revision_mismatch:
                logger.info(
                    "Revision: %s -> %s",
                    current_lock.revision_hash if current_lock else "none",
                    info.revision_hash,
                )
        else:
            logger.info("Package %s is already up to date", package_name)
        return decision

    def apply(self, info: CompletePackageInfo) -> None:
        """Write the resolved version, revision, and timestamp into both files."""
        logger.info(
            "Updating %s to version %s (revision %s, timestamp %s)",
            info.package_name,
            info.version,
            info.revision_hash,
            info.timestamp,
        )
        manifest_result = self.manifest.update_package_version(info.package_name, info.version)
        lock_result = self.lock.update_package_version(
            info.package_name, info.version, info.revision_hash, info.timestamp
        )
        write_files_staged([
            (self.manifest.file_path, manifest_result.content),
            (self.lock.file_path, lock_result.content),
        ])
        logger.info("Updated %s in %s and %s", info.package_name, self.manifest.file_name, self.lock.file_name)
        logger.info("Lock entry: %s", info.lock_entry)

    def reconcile(
        self,
        remote: str,
        package_name: str,
        version: Optional[str] = None,
        dry_run: bool = False,
    ) -> Optional[CompletePackageInfo]:
        """Bring both files up to date for ``package_name``.

        Returns:
            The CompletePackageInfo written (or that would be written when
            ``dry_run``), or None when nothing was resolved, the package is
            not tracked, or the files already match. ``last_outcome`` tells
            these cases apart.

        Raises:
            MissingFilesError: before any network call, when a file is absent.
        """
        logger.info("Starting package update for %s", package_name)
        self.last_outcome = None
        self.validate_files()

        if version is None:
            info = self.resolve_latest(remote, package_name)
        else:
            info = self.package_service.get_complete_package_info(remote, package_name, version)
        if info is None:
            logger.warning("No package info found for %s in remote %s", package_name, remote)
            self.last_outcome = ReconcileOutcome.UNRESOLVED
            return None

        decision = self.check_update(package_name, info)
        if is_debug_enabled(logger):
            logger.debug(
                "Update decision",
                extra=extra_context(
                    event="decision",
                    component="reconciler",
                    action="check_update",
                    outcome="update" if decision.needs_update else "noop",
                    target=package_name,
                ),
            )
        if not decision.tracked:
            self.last_outcome = ReconcileOutcome.UNTRACKED
            return None
        if not decision.needs_update:
            self.last_outcome = ReconcileOutcome.UP_TO_DATE
            return None

        if dry_run:
            logger.info("Dry run: would update %s to %s", package_name, info.lock_entry)
            self.last_outcome = ReconcileOutcome.DRY_RUN
            return info

        self.apply(info)
        self.last_outcome = ReconcileOutcome.UPDATED
        return info
