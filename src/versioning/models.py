"""Data models for Conan package resolution and lock reconciliation."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from constants import Constants


@dataclass(frozen=True)
class PackageReference:
    """Parsed ``name/version@user/channel`` reference."""
    name: str
    version: str
    user: str
    channel: str

    @property
    def is_default_namespace(self) -> bool:
        """True for the unscoped ``_/_`` namespace."""
        return self.user == Constants.DEFAULT_NAMESPACE and self.channel == Constants.DEFAULT_NAMESPACE


@dataclass(frozen=True)
class PackageVersion:
    """One version of a package discovered through registry search."""
    version: str
    package_name: str
    remote: str
    url: str
    reference: str
    last_modified: Optional[str] = None


@dataclass(frozen=True)
class LockEntry:
    """Parsed ``name/version#revision%timestamp`` lock entry."""
    package_ref: str  # e.g. "zterm/1.0.0.24"
    revision_hash: str
    timestamp: str  # e.g. "1756995353.576"


@dataclass(frozen=True)
class RevisionRecord:
    """A single record of the registry revisions endpoint."""
    revision: str
    time: str


@dataclass(frozen=True)
class RevisionsResponse:
    """Typed payload of the registry revisions endpoint."""
    reference: str
    revisions: List[RevisionRecord]


@dataclass(frozen=True)
class RevisionInfo:
    """Latest revision of one exact reference."""
    package_name: str
    version: str
    reference: str
    revision_hash: str
    raw_time: str
    timestamp: str
    lock_entry: str


@dataclass(frozen=True)
class CompletePackageInfo:
    """Version plus revision data: the unit compared against files on disk."""
    package_name: str
    version: str
    remote: str
    url: str
    reference: str
    revision_hash: str
    raw_time: str
    timestamp: str
    lock_entry: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EditResult:
    """Outcome of a text edit: the full updated text and the replacement count."""
    content: str
    count: int


@dataclass(frozen=True)
class UpdateDecision:
    """Comparison of the on-disk state against the resolved package info."""
    current_version: Optional[str]
    current_lock: Optional[LockEntry]
    version_mismatch: bool
    revision_mismatch: bool
    package_ref_mismatch: bool

    @property
    def tracked(self) -> bool:
        """False when neither file references the package."""
        return self.current_version is not None or self.current_lock is not None

    @property
    def needs_update(self) -> bool:
        if not self.tracked:
            return False
        return self.version_mismatch or self.revision_mismatch or self.package_ref_mismatch
