"""Parse/build utilities for Conan package references and lock entries.

Two string grammars are handled here:

- package reference: ``name/version@user/channel``
- lock entry: ``name/version#revision%timestamp``

All functions are pure; no I/O happens in this module.
"""

import re

from .models import LockEntry, PackageReference

_REFERENCE_RE = re.compile(r'^(.+?)/(.+?)@(.+?)/(.+?)$')
_LOCK_ENTRY_RE = re.compile(r'^([^#]+)#([^%]+)%(.+)$')


class MalformedReferenceError(ValueError):
    """Raised when a string does not follow the expected grammar."""


def parse_reference(s: str) -> PackageReference:
    """Parse ``name/version@user/channel`` into a PackageReference."""
    m = _REFERENCE_RE.match(s)
    if not m:
        raise MalformedReferenceError(f"Invalid reference format: {s!r}")
    name, version, user, channel = m.groups()
    return PackageReference(name=name, version=version, user=user, channel=channel)


def build_reference(ref: PackageReference) -> str:
    """Inverse of parse_reference."""
    return f"{ref.name}/{ref.version}@{ref.user}/{ref.channel}"


def split_reference(reference: str):
    """Split a reference on its first ``@`` into (package_path, user_channel).

    Both halves must be non-empty.
    """
    package_path, sep, user_channel = reference.partition('@')
    if not sep or not package_path or not user_channel:
        raise MalformedReferenceError(f"Invalid reference format: {reference!r}")
    return package_path, user_channel


def parse_lock_entry(s: str) -> LockEntry:
    """Parse ``ref#revision%timestamp`` into a LockEntry."""
    m = _LOCK_ENTRY_RE.match(s)
    if not m:
        raise MalformedReferenceError(f"Invalid lock entry format: {s!r}")
    package_ref, revision_hash, timestamp = m.groups()
    return LockEntry(package_ref=package_ref, revision_hash=revision_hash, timestamp=timestamp)


def build_lock_entry(package_ref: str, revision_hash: str, timestamp: str) -> str:
    """Inverse of parse_lock_entry."""
    return f"{package_ref}#{revision_hash}%{timestamp}"
