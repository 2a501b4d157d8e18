"""Conan version and revision resolvers backed by the Conan v2 REST API."""

import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from common.http_client import RegistryRequestError
from common.logging_utils import extra_context, is_debug_enabled
from registry.conan.client import ConanRegistryClient
from ..compare import sort_versions_desc
from ..grammar import (
    MalformedReferenceError,
    build_lock_entry,
    parse_reference,
    split_reference,
)
from ..models import PackageVersion, RevisionInfo

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Tried in order before falling back to datetime.fromisoformat
_TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",  # 2025-09-06T00:34:38.826+0800
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
)


class VersionNotFoundError(LookupError):
    """Raised when a requested version is absent from the registry."""

    def __init__(self, package_name: str, version: str):
        super().__init__(f"Version {version} not found for package {package_name}")
        self.package_name = package_name
        self.version = version


def _format_epoch_ms(ms: int) -> str:
    seconds, millis = divmod(ms, 1000)
    return f"{seconds}.{millis:03d}"


def _parse_registry_time(time_str: str) -> datetime:
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(time_str, fmt)
        except ValueError:
            continue
    return datetime.fromisoformat(time_str.replace("Z", "+00:00"))


def to_epoch_ms(moment: datetime) -> int:
    """Exact epoch milliseconds of ``moment``; naive values are local time."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    delta = moment - _EPOCH
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000


def convert_time_to_timestamp(time_str: str) -> str:
    """Convert a registry time like ``2025-09-06T00:34:38.826+0800`` to ``1757090078.826``.

    An unparsable value falls back to the current wall-clock time so the
    lock entry stays well formed.
    """
    try:
        return _format_epoch_ms(to_epoch_ms(_parse_registry_time(time_str)))
    except (TypeError, ValueError, OverflowError) as exc:
        logger.error("Failed to convert time %r: %s", time_str, exc)
        return _format_epoch_ms(time.time_ns() // 1_000_000)


class ConanVersionResolver:
    """Enumerate and rank all versions of a Conan package."""

    def __init__(self, client: ConanRegistryClient):
        self.client = client

    def _to_package_version(self, remote: str, raw: str) -> Optional[PackageVersion]:
        try:
            ref = parse_reference(raw)
        except MalformedReferenceError:
            if is_debug_enabled(logger):
                logger.debug(
                    "Skipping unparsable search result",
                    extra=extra_context(
                        event="parse",
                        component="resolver",
                        action="parse_reference",
                        outcome="malformed",
                        target=raw,
                    ),
                )
            return None
        if ref.is_default_namespace:
            url_path = f"{remote}/_/{ref.name}/{ref.version}"
        else:
            url_path = f"{remote}/{ref.user}/{ref.name}/{ref.version}"
        return PackageVersion(
            version=ref.version,
            package_name=ref.name,
            remote=remote,
            url=self.client.ui_url(url_path),
            reference=raw,
        )

    def get_package_versions(self, remote: str, package_name: str) -> List[PackageVersion]:
        """Return every known version of ``package_name``, newest first.

        Network failures are reported as an empty list.
        """
        logger.info("Searching for package versions: %s in remote %s", package_name, remote)
        try:
            results = self.client.search(remote, package_name)
        except RegistryRequestError as exc:
            logger.error("Failed to get package versions: %s", exc)
            return []

        prefix = f"{package_name}/"
        versions = []
        for raw in results:
            if not raw.startswith(prefix):
                continue
            pv = self._to_package_version(remote, raw)
            if pv is not None:
                versions.append(pv)

        if not versions:
            logger.warning("No versions found for package %s in remote %s", package_name, remote)
            return []

        versions = sort_versions_desc(versions, key=lambda v: v.version)
        logger.info("Found %d versions of %s", len(versions), package_name)
        for i, v in enumerate(versions, start=1):
            logger.debug("   %d. %s", i, v.version)
        return versions

    def get_latest_version(self, remote: str, package_name: str) -> Optional[PackageVersion]:
        versions = self.get_package_versions(remote, package_name)
        return versions[0] if versions else None


class ConanRevisionResolver:
    """Fetch the latest revision and lock entry of an exact reference."""

    def __init__(self, client: ConanRegistryClient, version_resolver: Optional[ConanVersionResolver] = None):
        self.client = client
        self.version_resolver = version_resolver or ConanVersionResolver(client)

    def get_package_revision(
        self,
        remote: str,
        package_name: str,
        version: str,
        reference: Optional[str] = None,
    ) -> Optional[RevisionInfo]:
        """Return the latest revision of ``package_name/version``.

        Args:
            remote: Remote repository name.
            package_name: Package name, e.g. "zterm".
            version: Exact version string.
            reference: Full reference; looked up through search when omitted.

        Returns:
            RevisionInfo, or None when the registry has no revisions or the
            request failed.

        Raises:
            VersionNotFoundError: ``reference`` omitted and the version is unknown.
            MalformedReferenceError: the reference has no ``@`` separator.
        """
        target_reference = reference
        if not target_reference:
            logger.info("Finding reference for %s/%s", package_name, version)
            versions = self.version_resolver.get_package_versions(remote, package_name)
            match = next((v for v in versions if v.version == version), None)
            if match is None:
                raise VersionNotFoundError(package_name, version)
            target_reference = match.reference

        package_path, user_channel = split_reference(target_reference)

        try:
            response = self.client.revisions(remote, package_path, user_channel)
        except RegistryRequestError as exc:
            logger.error("Failed to get revision info: %s", exc)
            return None

        if not response.revisions:
            logger.warning("No revisions found for %s/%s", package_name, version)
            return None

        latest = response.revisions[0]
        timestamp = convert_time_to_timestamp(latest.time)
        info = RevisionInfo(
            package_name=package_name,
            version=version,
            reference=response.reference,
            revision_hash=latest.revision,
            raw_time=latest.time,
            timestamp=timestamp,
            lock_entry=build_lock_entry(f"{package_name}/{version}", latest.revision, timestamp),
        )
        logger.info("Found revision %s (time %s -> %s)", latest.revision, latest.time, timestamp)
        return info
