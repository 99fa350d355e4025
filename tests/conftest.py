"""Pytest fixtures shared across the xpboard test suite."""

from __future__ import annotations

import base64
import json
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

import pytest

from analysis.dto import TransactionRecord


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Return a factory building unsigned JWTs with the given claims."""

    def factory(**claims: Any) -> str:
        header = _b64url(json.dumps({"alg": "HS256", "typ": "JWT"}).encode())
        payload = _b64url(json.dumps(claims).encode())
        return f"{header}.{payload}.signature"

    return factory


@pytest.fixture
def make_record() -> Callable[..., TransactionRecord]:
    """Return a factory for TransactionRecord values with sensible defaults."""

    def factory(
        amount: int,
        created_at: datetime | None = datetime(2024, 1, 15, tzinfo=UTC),
        *,
        path: str = "/athens/div-01/project",
        object_type: str = "project",
    ) -> TransactionRecord:
        return TransactionRecord(amount=amount, created_at=created_at, path=path, object_type=object_type)

    return factory


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database or network access.
    - `integration`: tests touching Django views, sessions, or the database.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
