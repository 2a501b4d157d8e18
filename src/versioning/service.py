"""Complete package resolution: latest (or pinned) version plus its latest revision."""

import logging
from typing import Optional

from registry.conan.client import ConanRegistryClient
from .models import CompletePackageInfo
from .resolvers.conan import ConanRevisionResolver, ConanVersionResolver, VersionNotFoundError

logger = logging.getLogger(__name__)


class ConanPackageService:
    """Combine version and revision resolution into one CompletePackageInfo."""

    def __init__(
        self,
        client: ConanRegistryClient,
        version_resolver: Optional[ConanVersionResolver] = None,
        revision_resolver: Optional[ConanRevisionResolver] = None,
    ):
        self.client = client
        self.version_resolver = version_resolver or ConanVersionResolver(client)
        self.revision_resolver = revision_resolver or ConanRevisionResolver(client, self.version_resolver)

    def get_complete_package_info(
        self, remote: str, package_name: str, version: Optional[str] = None
    ) -> Optional[CompletePackageInfo]:
        """Resolve version and revision data for ``package_name``.

        The latest version is used when ``version`` is None; a pinned
        version that the registry does not know raises VersionNotFoundError.
        Returns None when nothing could be resolved.
        """
        versions = self.version_resolver.get_package_versions(remote, package_name)
        if version is None:
            target = versions[0] if versions else None
            if target is None:
                logger.error("No versions found for package %s", package_name)
                return None
        else:
            target = next((v for v in versions if v.version == version), None)
            if target is None:
                raise VersionNotFoundError(package_name, version)

        revision = self.revision_resolver.get_package_revision(
            remote, package_name, target.version, target.reference
        )
        if revision is None:
            logger.error("No revision info found for %s/%s", package_name, target.version)
            return None

        return CompletePackageInfo(
            package_name=package_name,
            version=target.version,
            remote=remote,
            url=target.url,
            reference=revision.reference,
            revision_hash=revision.revision_hash,
            raw_time=revision.raw_time,
            timestamp=revision.timestamp,
            lock_entry=revision.lock_entry,
        )

    def resolve_latest(self, remote: str, package_name: str) -> Optional[CompletePackageInfo]:
        return self.get_complete_package_info(remote, package_name)
