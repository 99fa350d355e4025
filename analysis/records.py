"""Best-effort decoding of platform rows into analysis DTOs.

Rows arrive as decoded GraphQL JSON objects. Decoding here is:
- pure (no Django imports, no network access),
- lenient (never raises on malformed rows),
- lossy only where a field cannot be interpreted (missing amounts count as 0,
  unparseable timestamps become None).
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .dto import ProgressEntry, SkillTransaction, TransactionRecord


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Args:
        value: ISO-8601 string (a trailing `Z` is accepted) or a datetime.

    Returns:
        Timezone-aware datetime in UTC, or None when the value is missing or
        cannot be parsed. Naive values are treated as UTC.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    # Offsets near datetime.min/max can push the UTC value out of range.
    try:
        return parsed.astimezone(UTC)
    except (OverflowError, ValueError):
        return None


def parse_transaction(row: Mapping[str, Any]) -> TransactionRecord:
    """Decode one XP transaction row.

    Args:
        row: Row with `amount`, `createdAt`, `path` and either a nested
            `object.type` or a flat `objectType`.

    Returns:
        TransactionRecord; missing fields decode to neutral values.
    """

    return TransactionRecord(
        amount=parse_amount(row.get("amount")),
        created_at=parse_timestamp(row.get("createdAt")),
        path=str(row.get("path") or ""),
        object_type=_object_field(row, "type", flat_key="objectType"),
    )


def parse_transactions(rows: Any) -> tuple[TransactionRecord, ...]:
    """Decode a list of XP transaction rows, skipping non-object entries."""

    return tuple(parse_transaction(row) for row in iter_rows(rows))


def parse_skill_transaction(row: Mapping[str, Any]) -> SkillTransaction:
    """Decode one `skill_*` transaction row."""

    return SkillTransaction(
        type=str(row.get("type") or ""),
        amount=parse_amount(row.get("amount")),
    )


def parse_progress_entry(row: Mapping[str, Any]) -> ProgressEntry:
    """Decode one progress row.

    Args:
        row: Row with `grade`, `createdAt`, `path` and a nested `object`.

    Returns:
        ProgressEntry with `grade=None` when the attempt is ungraded.
    """

    grade_raw = row.get("grade")
    grade: float | None
    try:
        grade = None if grade_raw is None else float(grade_raw)
    except (TypeError, ValueError):
        grade = None
    return ProgressEntry(
        grade=grade,
        created_at=parse_timestamp(row.get("createdAt")),
        path=str(row.get("path") or ""),
        object_name=_object_field(row, "name", flat_key="objectName"),
        object_type=_object_field(row, "type", flat_key="objectType"),
    )


def iter_rows(rows: Any) -> list[Mapping[str, Any]]:
    """Return only the mapping entries of a decoded JSON list."""

    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, Mapping)]


def parse_amount(value: object) -> int:
    """Best-effort integer parsing; anything unusable contributes 0."""

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value)))
    except (OverflowError, ValueError):
        return 0


def _object_field(row: Mapping[str, Any], key: str, *, flat_key: str) -> str:
    """Read a field from the nested `object` descriptor or its flat alias."""

    nested = row.get("object")
    if isinstance(nested, Mapping) and nested.get(key) is not None:
        return str(nested[key])
    return str(row.get(flat_key) or "")
