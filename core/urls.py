"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import proxy, views

app_name = "core"

urlpatterns = [
    path("", views.profile, name="profile"),
    path("login/", views.login_view, name="login"),
    path("logout/", views.logout_view, name="logout"),
    path("api/profile/", views.profile_api, name="profile_api"),
    path("api/auth/signin", proxy.proxy_sign_in, name="proxy_sign_in"),
    path("api/graphql", proxy.proxy_graphql, name="proxy_graphql"),
]
