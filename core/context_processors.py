"""Template context processors for xpboard."""

from __future__ import annotations

from django.http import HttpRequest

from core.auth import SESSION_TOKEN_KEY


def platform_session(request: HttpRequest) -> dict[str, bool]:
    """Expose whether the session holds a platform token to all templates.

    Args:
        request: Current request object.

    Returns:
        Context dict with `signed_in` boolean.
    """

    return {"signed_in": bool(request.session.get(SESSION_TOKEN_KEY))}
