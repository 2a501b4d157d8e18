"""Conan registry package.

This package provides Conan v2 (JFrog Artifactory) registry support:
- client.py: HTTP interactions with the search and revisions endpoints

Patch points are exposed at registry.conan for tests.
"""

# Patch points exposed for tests (e.g., monkeypatch in tests)
from common.http_client import request_json  # noqa: F401

from .client import ConanRegistryClient  # noqa: F401

__all__ = [
    "ConanRegistryClient",
    "request_json",
]
