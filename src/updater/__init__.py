"""Package update workflow: reconciliation and git staging."""

from .git_stage import GitStageError, stage_files  # noqa: F401
from .reconciler import PackageReconciler, ReconcileOutcome  # noqa: F401

__all__ = ["PackageReconciler", "ReconcileOutcome", "GitStageError", "stage_files"]
