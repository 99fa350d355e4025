"""Minimal HTTP transport to the learning platform.

All outbound requests (sign-in, GraphQL, proxying) go through
`post_to_platform`. HTTP error statuses are returned, not raised, so callers
decide how each status maps onto their own errors.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from dataclasses import dataclass

from django.conf import settings

logger = logging.getLogger(__name__)


class PlatformUnavailableError(Exception):
    """Raised when the platform cannot be reached at all."""


@dataclass(frozen=True, slots=True)
class PlatformResponse:
    """Status code and raw body of a platform response."""

    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def post_to_platform(
    url: str,
    *,
    headers: dict[str, str],
    body: bytes | None = None,
    timeout: float | None = None,
) -> PlatformResponse:
    """POST to a platform endpoint.

    Args:
        url: Absolute endpoint URL.
        headers: Request headers (Authorization, Content-Type, ...).
        body: Optional request body.
        timeout: Socket timeout in seconds; defaults to
            `settings.XPBOARD_HTTP_TIMEOUT_SECONDS`.

    Returns:
        PlatformResponse for both successful and error statuses.

    Raises:
        PlatformUnavailableError: On connection failures and timeouts.
    """

    request = urllib.request.Request(url, data=body, headers=headers, method="POST")
    if timeout is None:
        timeout = settings.XPBOARD_HTTP_TIMEOUT_SECONDS
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return PlatformResponse(status=response.status, body=response.read())
    except urllib.error.HTTPError as exc:
        return PlatformResponse(status=exc.code, body=exc.read() or b"")
    except (urllib.error.URLError, TimeoutError) as exc:
        logger.warning("Platform request to %s failed: %s", url, exc)
        raise PlatformUnavailableError(f"Failed to connect to {url}") from exc
