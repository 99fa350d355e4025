"""Credential service for the learning platform.

The platform exchanges HTTP Basic credentials for a JWT. The token is kept in
the Django session and is the only credential the rest of the app sees;
identifiers and passwords are never stored.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.conf import settings
from django.contrib.sessions.backends.base import SessionBase
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect
from django.utils.http import urlencode

from core.http import PlatformUnavailableError, post_to_platform

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "platform_token"
SESSION_USER_ID_KEY = "platform_user_id"


class SignInError(Exception):
    """Raised when the platform rejects or cannot process a sign-in."""


def sign_in(identifier: str, password: str) -> str:
    """Exchange platform credentials for a session token.

    Args:
        identifier: Username or email.
        password: Account password.

    Returns:
        The JWT issued by the platform.

    Raises:
        SignInError: On rejected credentials, platform errors, unreachable
            platform, or a response without a token.
    """

    credentials = base64.b64encode(f"{identifier}:{password}".encode()).decode("ascii")
    try:
        response = post_to_platform(
            settings.XPBOARD_AUTH_ENDPOINT,
            headers={"Authorization": f"Basic {credentials}", "Content-Type": "application/json"},
        )
    except PlatformUnavailableError as exc:
        raise SignInError("Failed to connect to authentication service") from exc

    logger.info("Sign-in request: status=%d", response.status)
    if response.status in (401, 403):
        raise SignInError("Invalid username/email or password")
    if not response.ok:
        raise SignInError(f"Authentication failed (HTTP {response.status})")

    token = _token_from_body(response.body)
    if not token:
        raise SignInError("No token received from server")
    return token


def decode_token_payload(token: str) -> dict[str, Any] | None:
    """Decode the (unverified) payload segment of a JWT.

    Args:
        token: Encoded JWT.

    Returns:
        The payload claims, or None when the token is malformed.
    """

    parts = token.split(".")
    if len(parts) < 2:
        return None
    segment = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(segment))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def token_user_id(token: str) -> str | None:
    """Return the user id claim (`sub`, `userId` or `id`) of a token."""

    payload = decode_token_payload(token)
    if payload is None:
        return None
    for claim in ("sub", "userId", "id"):
        value = payload.get(claim)
        if value not in (None, ""):
            return str(value)
    return None


def token_expired(token: str, *, now: float | None = None) -> bool:
    """Return whether a token is unusable.

    Args:
        token: Encoded JWT.
        now: Current UNIX time; defaults to `time.time()`.

    Returns:
        True for malformed tokens and tokens whose `exp` claim has passed.
        Tokens without an `exp` claim never expire.
    """

    payload = decode_token_payload(token)
    if payload is None:
        return True
    exp = payload.get("exp")
    if exp is None:
        return False
    try:
        expires_at = float(exp)
    except (TypeError, ValueError):
        return True
    current = time.time() if now is None else now
    return current >= expires_at


def store_session_token(session: SessionBase, token: str) -> None:
    """Persist a freshly issued token (and its user id) in the session."""

    session.cycle_key()
    session[SESSION_TOKEN_KEY] = token
    user_id = token_user_id(token)
    if user_id is not None:
        session[SESSION_USER_ID_KEY] = user_id


def session_token(session: SessionBase) -> str | None:
    """Return the session's token when it is still valid.

    An expired or malformed token invalidates the session as a side effect.
    """

    token = session.get(SESSION_TOKEN_KEY)
    if not token:
        return None
    if token_expired(token):
        logger.info("Discarding expired platform token")
        invalidate_session(session)
        return None
    return token


def invalidate_session(session: SessionBase) -> None:
    """Forget the platform token and user id."""

    session.pop(SESSION_TOKEN_KEY, None)
    session.pop(SESSION_USER_ID_KEY, None)


def session_required(view: Callable[..., HttpResponse]) -> Callable[..., HttpResponse]:
    """Redirect to the sign-in page unless the session holds a valid token."""

    @wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        if session_token(request.session) is None:
            query = urlencode({"next": request.get_full_path()})
            return redirect(f"{settings.LOGIN_URL}?{query}")
        return view(request, *args, **kwargs)

    return wrapper


def _token_from_body(body: bytes) -> str | None:
    """Extract the token from a JSON string or a `{"token": ...}` object."""

    try:
        data = json.loads(body)
    except (UnicodeDecodeError, ValueError):
        return None
    if isinstance(data, dict):
        data = data.get("token")
    if isinstance(data, str) and data:
        return data
    return None
