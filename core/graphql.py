"""Data-access service for the platform GraphQL API.

`execute` runs one query with the session token. The typed `fetch_*`
helpers decode the result rows into analysis DTOs; no chart logic lives here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from django.conf import settings

from analysis.aggregations import audit_summary, empty_skill_scores, skill_scores
from analysis.dto import AuditSummary, ProgressEntry, SkillScore, TransactionRecord, UserInfo
from analysis.records import (
    iter_rows,
    parse_amount,
    parse_progress_entry,
    parse_skill_transaction,
    parse_transactions,
)
from core import queries
from core.http import PlatformUnavailableError, post_to_platform

logger = logging.getLogger(__name__)


class GraphQLError(Exception):
    """Raised when a GraphQL request fails or returns errors."""


class SessionExpiredError(GraphQLError):
    """Raised when the platform rejects the session token."""


@dataclass(frozen=True, slots=True)
class ProfileData:
    """Everything the profile page needs, fetched in one pass."""

    user: UserInfo
    xp_transactions: tuple[TransactionRecord, ...]
    progress: tuple[ProgressEntry, ...]
    audit: AuditSummary
    skills: tuple[SkillScore, ...]


def execute(query: str, *, token: str, variables: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Execute a GraphQL query.

    Args:
        query: GraphQL document.
        token: Platform session token (sent as a bearer token).
        variables: Optional query variables.

    Returns:
        The `data` object of the response.

    Raises:
        SessionExpiredError: When the platform answers 401.
        GraphQLError: On transport failures, error statuses, undecodable
            responses, or a payload carrying `errors`.
    """

    body = json.dumps({"query": query, "variables": dict(variables or {})}).encode()
    try:
        response = post_to_platform(
            settings.XPBOARD_GRAPHQL_ENDPOINT,
            headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
            body=body,
        )
    except PlatformUnavailableError as exc:
        raise GraphQLError("Failed to connect to GraphQL service") from exc

    logger.debug("GraphQL request: status=%d, size=%d bytes", response.status, len(response.body))
    if response.status == 401:
        raise SessionExpiredError("Authentication expired. Please login again.")
    if not response.ok:
        raise GraphQLError(f"GraphQL request failed (HTTP {response.status})")

    try:
        payload = json.loads(response.body)
    except (UnicodeDecodeError, ValueError) as exc:
        raise GraphQLError("GraphQL response was not valid JSON") from exc
    if not isinstance(payload, dict):
        raise GraphQLError("GraphQL response was not an object")

    errors = payload.get("errors")
    if errors:
        logger.warning("GraphQL errors: %s", errors)
        first = errors[0] if isinstance(errors, list) else {}
        message = first.get("message") if isinstance(first, dict) else None
        raise GraphQLError(message or "GraphQL query failed")
    data = payload.get("data")
    return data if isinstance(data, dict) else {}


def fetch_user_info(token: str) -> UserInfo:
    """Fetch the signed-in user's id, login and email."""

    data = execute(queries.USER_INFO, token=token)
    users = data.get("user")
    user = users[0] if isinstance(users, list) and users else users
    if not isinstance(user, dict):
        raise GraphQLError("No user returned for the current session")
    login = str(user.get("login") or "")
    attrs = user.get("attrs") if isinstance(user.get("attrs"), dict) else {}
    user_id = user.get("id")
    return UserInfo(
        id=int(user_id) if isinstance(user_id, int) else None,
        login=login,
        email=str(attrs.get("email") or login),
    )


def fetch_xp_transactions(token: str) -> tuple[TransactionRecord, ...]:
    """Fetch every XP transaction, oldest first."""

    data = execute(queries.XP_TRANSACTIONS, token=token)
    return parse_transactions(data.get("transaction"))


def fetch_progress(token: str) -> tuple[ProgressEntry, ...]:
    """Fetch progress entries, newest first."""

    data = execute(queries.PROGRESS, token=token)
    return tuple(parse_progress_entry(row) for row in iter_rows(data.get("progress")))


def fetch_audit_summary(token: str) -> AuditSummary:
    """Fetch up/down audit transactions and summarize them."""

    data = execute(queries.AUDIT_TRANSACTIONS, token=token)
    return audit_summary(
        (str(row.get("type") or ""), parse_amount(row.get("amount")))
        for row in iter_rows(data.get("transaction"))
    )


def fetch_skill_scores(token: str) -> tuple[SkillScore, ...]:
    """Fetch skill transactions and reduce them to eight radar scores.

    Query failures other than an expired session degrade to eight zero
    scores so the rest of the profile still renders.
    """

    try:
        data = execute(queries.SKILL_TRANSACTIONS, token=token)
    except SessionExpiredError:
        raise
    except GraphQLError:
        logger.warning("Skill query failed; showing empty skills", exc_info=True)
        return empty_skill_scores()
    return skill_scores(parse_skill_transaction(row) for row in iter_rows(data.get("transaction")))


def fetch_profile_data(token: str) -> ProfileData:
    """Fetch all data shown on the profile page."""

    return ProfileData(
        user=fetch_user_info(token),
        xp_transactions=fetch_xp_transactions(token),
        progress=fetch_progress(token),
        audit=fetch_audit_summary(token),
        skills=fetch_skill_scores(token),
    )
