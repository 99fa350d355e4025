"""Unit tests for the platform HTTP transport."""

from __future__ import annotations

import io
import urllib.error
import urllib.request

import pytest

from core.http import PlatformResponse, PlatformUnavailableError, post_to_platform

pytestmark = pytest.mark.unit


class _FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def test_successful_post_returns_status_and_body(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_urlopen(request: urllib.request.Request, timeout: float) -> _FakeResponse:
        seen["method"] = request.get_method()
        seen["auth"] = request.get_header("Authorization")
        seen["data"] = request.data
        seen["timeout"] = timeout
        return _FakeResponse(200, b'{"data": {}}')

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    response = post_to_platform(
        "https://platform.test/api", headers={"Authorization": "Bearer t"}, body=b"{}", timeout=3
    )

    assert response == PlatformResponse(status=200, body=b'{"data": {}}')
    assert response.ok is True
    assert seen == {"method": "POST", "auth": "Bearer t", "data": b"{}", "timeout": 3}


def test_timeout_defaults_to_settings(monkeypatch: pytest.MonkeyPatch, settings) -> None:
    settings.XPBOARD_HTTP_TIMEOUT_SECONDS = 7
    timeouts: list[float] = []

    def fake_urlopen(request: urllib.request.Request, timeout: float) -> _FakeResponse:
        timeouts.append(timeout)
        return _FakeResponse(204, b"")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    post_to_platform("https://platform.test/api", headers={})
    assert timeouts == [7]


def test_error_statuses_are_returned_not_raised(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request: urllib.request.Request, timeout: float) -> _FakeResponse:
        raise urllib.error.HTTPError(request.full_url, 401, "Unauthorized", {}, io.BytesIO(b"denied"))

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    response = post_to_platform("https://platform.test/api", headers={})

    assert response.status == 401
    assert response.body == b"denied"
    assert response.ok is False


@pytest.mark.parametrize(
    "error",
    [urllib.error.URLError("connection refused"), TimeoutError("timed out")],
    ids=["url-error", "timeout"],
)
def test_connection_failures_raise_platform_unavailable(monkeypatch: pytest.MonkeyPatch, error: Exception) -> None:
    def fake_urlopen(request: urllib.request.Request, timeout: float) -> _FakeResponse:
        raise error

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(PlatformUnavailableError):
        post_to_platform("https://platform.test/api", headers={})
