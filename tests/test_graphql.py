"""Unit tests for the GraphQL data-access service."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from core import graphql, queries
from core.graphql import (
    GraphQLError,
    SessionExpiredError,
    execute,
    fetch_audit_summary,
    fetch_profile_data,
    fetch_skill_scores,
    fetch_user_info,
    fetch_xp_transactions,
)
from core.http import PlatformResponse, PlatformUnavailableError

pytestmark = pytest.mark.unit


def _json(payload: Any, status: int = 200) -> PlatformResponse:
    return PlatformResponse(status=status, body=json.dumps(payload).encode())


def _route(responses: dict[str, PlatformResponse]) -> Callable[..., PlatformResponse]:
    """Answer each query document with a fixed response."""

    def fake_post(url: str, *, headers: dict[str, str], body: bytes | None = None, timeout=None) -> PlatformResponse:
        query = json.loads(body or b"{}")["query"]
        return responses[query]

    return fake_post


def test_execute_sends_bearer_token_and_returns_data(monkeypatch: pytest.MonkeyPatch, settings) -> None:
    settings.XPBOARD_GRAPHQL_ENDPOINT = "https://platform.test/graphql"
    calls: list[tuple[str, dict[str, str], dict[str, Any]]] = []

    def fake_post(url: str, *, headers: dict[str, str], body: bytes | None = None, timeout=None) -> PlatformResponse:
        calls.append((url, headers, json.loads(body or b"{}")))
        return _json({"data": {"user": []}})

    monkeypatch.setattr(graphql, "post_to_platform", fake_post)

    assert execute("query { user { id } }", token="tok", variables={"id": 1}) == {"user": []}
    url, headers, sent = calls[0]
    assert url == "https://platform.test/graphql"
    assert headers["Authorization"] == "Bearer tok"
    assert sent == {"query": "query { user { id } }", "variables": {"id": 1}}


def test_execute_maps_401_to_session_expired(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(graphql, "post_to_platform", lambda url, **kwargs: _json({}, status=401))

    with pytest.raises(SessionExpiredError):
        execute("query {}", token="tok")


@pytest.mark.parametrize(
    ("response", "message"),
    [
        (PlatformResponse(status=500, body=b"boom"), "HTTP 500"),
        (PlatformResponse(status=200, body=b"<html>"), "not valid JSON"),
        (PlatformResponse(status=200, body=b"[1, 2]"), "not an object"),
        (_json({"errors": [{"message": "field 'nope' not found"}]}), "field 'nope' not found"),
    ],
    ids=["server-error", "bad-json", "not-object", "graphql-errors"],
)
def test_execute_failures_raise_graphql_error(
    monkeypatch: pytest.MonkeyPatch, response: PlatformResponse, message: str
) -> None:
    monkeypatch.setattr(graphql, "post_to_platform", lambda url, **kwargs: response)

    with pytest.raises(GraphQLError, match=message) as excinfo:
        execute("query {}", token="tok")
    assert not isinstance(excinfo.value, SessionExpiredError)


def test_execute_wraps_connection_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def unreachable(url: str, **kwargs) -> PlatformResponse:
        raise PlatformUnavailableError(url)

    monkeypatch.setattr(graphql, "post_to_platform", unreachable)

    with pytest.raises(GraphQLError, match="Failed to connect"):
        execute("query {}", token="tok")


def test_fetch_user_info_reads_login_and_email(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        graphql,
        "post_to_platform",
        _route({queries.USER_INFO: _json({"data": {"user": [{"id": 12, "login": "alice", "attrs": {"email": "a@x.gr"}}]}})}),
    )

    user = fetch_user_info("tok")

    assert (user.id, user.login, user.email) == (12, "alice", "a@x.gr")


def test_fetch_user_info_without_user_is_an_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(graphql, "post_to_platform", _route({queries.USER_INFO: _json({"data": {"user": []}})}))

    with pytest.raises(GraphQLError):
        fetch_user_info("tok")


def test_fetch_xp_transactions_decodes_rows(monkeypatch: pytest.MonkeyPatch) -> None:
    rows = [
        {"amount": 500, "createdAt": "2024-10-03T08:00:00Z", "path": "/athens/div-01/a", "object": {"type": "project"}},
        {"amount": "40", "createdAt": None, "path": "/athens/div-01/b", "objectType": "exercise"},
        "junk",
    ]
    monkeypatch.setattr(
        graphql, "post_to_platform", _route({queries.XP_TRANSACTIONS: _json({"data": {"transaction": rows}})})
    )

    records = fetch_xp_transactions("tok")

    assert len(records) == 2
    assert records[0].amount == 500
    assert records[0].created_at == datetime(2024, 10, 3, 8, tzinfo=UTC)
    assert records[1].amount == 40
    assert records[1].created_at is None
    assert records[1].object_type == "exercise"


def test_fetch_audit_summary(monkeypatch: pytest.MonkeyPatch) -> None:
    rows = [{"type": "up", "amount": 300}, {"type": "up", "amount": 150}, {"type": "down", "amount": 300}]
    monkeypatch.setattr(
        graphql, "post_to_platform", _route({queries.AUDIT_TRANSACTIONS: _json({"data": {"transaction": rows}})})
    )

    summary = fetch_audit_summary("tok")

    assert (summary.total_up, summary.total_down) == (450, 300)
    assert summary.display == "1.5"


def test_fetch_skill_scores_keeps_the_highest_amount(monkeypatch: pytest.MonkeyPatch) -> None:
    rows = [
        {"type": "skill_go", "amount": 35},
        {"type": "skill_go", "amount": 55},
        {"type": "skill_js", "amount": 20},
    ]
    monkeypatch.setattr(
        graphql, "post_to_platform", _route({queries.SKILL_TRANSACTIONS: _json({"data": {"transaction": rows}})})
    )

    scores = {score.name: score.value for score in fetch_skill_scores("tok")}

    assert scores["Go"] == 55
    assert scores["JavaScript"] == 20
    assert scores["Docker"] == 0


def test_fetch_skill_scores_degrades_to_zero_on_query_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        graphql,
        "post_to_platform",
        _route({queries.SKILL_TRANSACTIONS: _json({"errors": [{"message": "denied"}]})}),
    )

    scores = fetch_skill_scores("tok")

    assert len(scores) == 8
    assert all(score.value == 0 for score in scores)


def test_fetch_skill_scores_propagates_expired_sessions(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(graphql, "post_to_platform", lambda url, **kwargs: _json({}, status=401))

    with pytest.raises(SessionExpiredError):
        fetch_skill_scores("tok")


def test_fetch_profile_data_combines_every_query(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        graphql,
        "post_to_platform",
        _route(
            {
                queries.USER_INFO: _json({"data": {"user": [{"id": 1, "login": "bob", "attrs": {}}]}}),
                queries.XP_TRANSACTIONS: _json(
                    {"data": {"transaction": [{"amount": 100, "createdAt": "2024-01-05T00:00:00Z", "path": "/p"}]}}
                ),
                queries.PROGRESS: _json(
                    {"data": {"progress": [{"grade": 1, "path": "/p", "object": {"name": "p", "type": "project"}}]}}
                ),
                queries.AUDIT_TRANSACTIONS: _json({"data": {"transaction": []}}),
                queries.SKILL_TRANSACTIONS: _json({"data": {"transaction": []}}),
            }
        ),
    )

    profile = fetch_profile_data("tok")

    assert profile.user.login == "bob"
    assert profile.user.email == "bob"
    assert [record.amount for record in profile.xp_transactions] == [100]
    assert profile.progress[0].grade == 1.0
    assert profile.audit.display == "0.0"
    assert len(profile.skills) == 8
