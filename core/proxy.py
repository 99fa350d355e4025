"""Pass-through endpoints to the platform API.

Browser clients that cannot reach the platform directly (CORS) post to these
views instead. Requests and responses are forwarded unchanged apart from the
headers listed here.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core.http import PlatformUnavailableError, post_to_platform

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def proxy_sign_in(request: HttpRequest) -> HttpResponse:
    """Forward a Basic-auth sign-in request to the platform."""

    authorization = request.headers.get("Authorization", "")
    if not authorization:
        return HttpResponse("Authorization header required", status=401, content_type="text/plain")
    try:
        response = post_to_platform(
            settings.XPBOARD_AUTH_ENDPOINT,
            headers={"Authorization": authorization, "Content-Type": "application/json"},
        )
    except PlatformUnavailableError:
        return HttpResponse(
            "Failed to connect to authentication service", status=502, content_type="text/plain"
        )
    logger.info("Proxied sign-in request: status=%d", response.status)
    return HttpResponse(response.body, status=response.status, content_type="application/json")


@csrf_exempt
@require_POST
def proxy_graphql(request: HttpRequest) -> HttpResponse:
    """Forward a bearer-authenticated GraphQL request to the platform."""

    authorization = request.headers.get("Authorization", "")
    if not authorization:
        return HttpResponse("Authorization header required", status=401, content_type="text/plain")
    try:
        response = post_to_platform(
            settings.XPBOARD_GRAPHQL_ENDPOINT,
            headers={"Authorization": authorization, "Content-Type": "application/json"},
            body=request.body,
        )
    except PlatformUnavailableError:
        return HttpResponse("Failed to connect to GraphQL service", status=502, content_type="text/plain")
    logger.info("Proxied GraphQL request: status=%d, size=%d bytes", response.status, len(response.body))
    return HttpResponse(response.body, status=response.status, content_type="application/json")
