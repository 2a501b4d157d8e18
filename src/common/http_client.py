"""Shared HTTP helpers used by the registry client.

Encapsulates request/timeout error handling so callers deal with a single
exception type. Each call makes exactly one attempt; there is no retry,
backoff, or response cache at this layer.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class RegistryRequestError(Exception):
    """Raised when a registry request fails at the transport or HTTP level."""

    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def request_json(
    url: str,
    method: str = "GET",
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> Any:
    """Perform an HTTP request and decode the JSON body.

    Args:
        url: Target URL.
        method: HTTP method name.
        headers: Optional request headers.
        **kwargs: Passed through to requests.request.

    Returns:
        The decoded JSON document.

    Raises:
        RegistryRequestError: On timeouts, connection errors, non-2xx status,
            or a body that is not valid JSON.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action=method,
                    target=safe_target,
                ),
            )
        try:
            res = requests.request(
                method,
                url,
                headers=headers,
                timeout=Constants.REQUEST_TIMEOUT,
                **kwargs,
            )
        except requests.Timeout as exc:
            logger.error(
                "HTTP %s %s timed out after %s seconds",
                method,
                safe_target,
                Constants.REQUEST_TIMEOUT,
            )
            raise RegistryRequestError(f"Request timed out: {exc}", url=url) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("HTTP %s %s connection error: %s", method, safe_target, exc)
            raise RegistryRequestError(f"Connection error: {exc}", url=url) from exc

    if not 200 <= res.status_code < 300:
        logger.error(
            "HTTP %s %s failed (%sms)",
            method,
            safe_target,
            t.duration_ms(),
            extra=extra_context(
                event="http_response",
                component="http_client",
                action=method,
                outcome="http_error",
                status_code=res.status_code,
                target=safe_target,
            ),
        )
        raise RegistryRequestError(
            f"HTTP {res.status_code}: {res.text}",
            url=url,
            status_code=res.status_code,
        )

    try:
        parsed = json.loads(res.text)
    except json.JSONDecodeError as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="request_json",
                    outcome="json_decode_error",
                    status_code=res.status_code,
                    target=safe_target,
                ),
            )
        raise RegistryRequestError(
            f"Invalid JSON in response: {exc}",
            url=url,
            status_code=res.status_code,
        ) from exc

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action=method,
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
            ),
        )
    return parsed
