"""Views for platform sign-in and the profile dashboard."""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from core.auth import (
    SignInError,
    invalidate_session,
    session_required,
    session_token,
    sign_in,
    store_session_token,
)
from core.forms import SignInForm
from core.graphql import GraphQLError, ProfileData, SessionExpiredError, fetch_profile_data
from core.services import ProfileDashboard, build_profile_dashboard, viewport_from_query

logger = logging.getLogger(__name__)


def login_view(request: HttpRequest) -> HttpResponse:
    """Render the sign-in page and exchange credentials for a platform token."""

    if session_token(request.session) is not None:
        return redirect(settings.LOGIN_REDIRECT_URL)

    next_url = request.POST.get("next") or request.GET.get("next") or ""
    form = SignInForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            token = sign_in(form.cleaned_data["identifier"], form.cleaned_data["password"])
        except SignInError as exc:
            form.add_error(None, str(exc))
        else:
            store_session_token(request.session, token)
            return redirect(_safe_next_url(request, next_url))

    return render(request, "core/login.html", {"form": form, "next": next_url})


@require_POST
def logout_view(request: HttpRequest) -> HttpResponse:
    """Invalidate the platform session and return to the sign-in page."""

    invalidate_session(request.session)
    messages.info(request, "You have been signed out.")
    return redirect(settings.LOGIN_URL)


@session_required
def profile(request: HttpRequest) -> HttpResponse:
    """Render the profile summary and both charts.

    Platform failures render an error state with a retry link; an expired
    session sends the user back to the sign-in page.
    """

    token = session_token(request.session)
    if token is None:
        return redirect(settings.LOGIN_URL)
    try:
        profile_data = fetch_profile_data(token)
    except SessionExpiredError:
        invalidate_session(request.session)
        messages.warning(request, "Your session expired. Please sign in again.")
        return redirect(settings.LOGIN_URL)
    except GraphQLError as exc:
        logger.warning("Profile fetch failed: %s", exc)
        return render(request, "core/profile.html", {"error": str(exc)}, status=502)

    dashboard = _build_dashboard(request, profile_data)
    return render(
        request,
        "core/profile.html",
        {"summary": dashboard.summary, "dashboard_payload": dashboard.as_payload(), "error": None},
    )


def profile_api(request: HttpRequest) -> JsonResponse:
    """Return the dashboard payload (summary + encoded geometries) as JSON."""

    token = session_token(request.session)
    if token is None:
        return JsonResponse({"error": "Not signed in."}, status=401)
    try:
        profile_data = fetch_profile_data(token)
    except SessionExpiredError:
        invalidate_session(request.session)
        return JsonResponse({"error": "Authentication expired. Please login again."}, status=401)
    except GraphQLError as exc:
        return JsonResponse({"error": str(exc)}, status=502)

    return JsonResponse(_build_dashboard(request, profile_data).as_payload())


def _build_dashboard(request: HttpRequest, profile_data: ProfileData) -> ProfileDashboard:
    """Build the dashboard using viewport sizes measured by the browser, if sent."""

    return build_profile_dashboard(
        profile_data,
        xp_viewport=viewport_from_query(request.GET.get("xp_width"), request.GET.get("xp_height")),
        skills_viewport=viewport_from_query(request.GET.get("skills_width"), request.GET.get("skills_height")),
    )


def _safe_next_url(request: HttpRequest, candidate: str) -> str:
    """Return `candidate` when it points back at this site, else the default."""

    value = candidate.strip()
    if value and url_has_allowed_host_and_scheme(
        url=value,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return value
    return settings.LOGIN_REDIRECT_URL
