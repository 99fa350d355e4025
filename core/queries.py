"""GraphQL queries issued against the platform."""

from __future__ import annotations

from typing import Final

USER_INFO: Final[str] = """
query {
  user {
    id
    login
    attrs
  }
}
"""

XP_TRANSACTIONS: Final[str] = """
query {
  transaction(where: {type: {_eq: "xp"}}, order_by: {createdAt: asc}) {
    id
    amount
    createdAt
    path
    object {
      name
      type
    }
  }
}
"""

PROGRESS: Final[str] = """
query {
  progress(order_by: {createdAt: desc}) {
    id
    grade
    createdAt
    path
    object {
      name
      type
    }
  }
}
"""

AUDIT_TRANSACTIONS: Final[str] = """
query {
  transaction(where: {type: {_in: ["up", "down"]}}) {
    type
    amount
  }
}
"""

SKILL_TRANSACTIONS: Final[str] = """
query {
  transaction(where: {type: {_like: "skill_%"}}, order_by: {amount: desc}) {
    type
    amount
    createdAt
  }
}
"""
