"""Conan registry client: search and revisions endpoints of the Conan v2 REST API."""
from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Callable, List, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.models import RevisionRecord, RevisionsResponse

import registry.conan as conan_pkg

logger = logging.getLogger(__name__)

RequestJson = Callable[..., Any]


class ConanRegistryClient:
    """Thin typed wrapper over the two registry endpoints used for resolution.

    Transport failures propagate as ``RegistryRequestError``; callers decide
    whether that degrades to an empty result.
    """

    def __init__(self, base_url: str, http: Optional[RequestJson] = None):
        self.base_url = base_url.rstrip("/")
        self._http = http

    def _request(self, url: str) -> Any:
        http = self._http or conan_pkg.request_json
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="client",
                    action="GET",
                    target=safe_url(url),
                    package_manager="conan",
                ),
            )
        return http(url, "GET", dict(Constants.HEADERS_JSON))

    def api_url(self, remote: str) -> str:
        """Base of the v2 API for ``remote``."""
        return f"{self.base_url}/{Constants.CONAN_API_PATH}/{remote}/v2/{Constants.CONAN_API_KIND}"

    def ui_url(self, url_path: str) -> str:
        """Browsable UI URL for a package path."""
        return f"{self.base_url}/{Constants.CONAN_UI_PATH}/{url_path}"

    def search(self, remote: str, package_name: str) -> List[str]:
        """Return the raw reference strings matching ``package_name``."""
        url = f"{self.api_url(remote)}/search?q={urllib.parse.quote(package_name, safe='')}"
        data = self._request(url)
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            return []
        refs = [r for r in results if isinstance(r, str)]
        logger.info("Search for %s in %s returned %d results", package_name, remote, len(refs))
        return refs

    def revisions(self, remote: str, package_path: str, user_channel: str) -> RevisionsResponse:
        """Return the revisions of one exact reference, in registry order."""
        url = f"{self.api_url(remote)}/{package_path}/{user_channel}/revisions"
        data = self._request(url)
        if not isinstance(data, dict):
            data = {}
        records = []
        for item in data.get("revisions") or []:
            if not isinstance(item, dict) or not item.get("revision"):
                continue
            records.append(RevisionRecord(revision=str(item["revision"]), time=str(item.get("time") or "")))
        reference = data.get("reference") or f"{package_path}@{user_channel}"
        logger.info("Revisions for %s@%s: %d", package_path, user_channel, len(records))
        return RevisionsResponse(reference=reference, revisions=records)
