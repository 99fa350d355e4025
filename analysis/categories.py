"""Shared skill category definitions.

SkillCategory values are the display names of the eight radar axes. Their
declaration order is the stable axis order used by the radar chart.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class SkillCategory(StrEnum):
    """Skill shown on one radar axis, in axis order."""

    frontend = "Frontend"
    programming = "Programming"
    backend = "Backend"
    go = "Go"
    javascript = "JavaScript"
    git = "Git"
    docker = "Docker"
    algorithm = "Algorithm"


SKILL_ORDER: Final[tuple[SkillCategory, ...]] = tuple(SkillCategory)

SKILL_TRANSACTION_TYPES: Final[dict[str, SkillCategory]] = {
    "skill_front-end": SkillCategory.frontend,
    "skill_prog": SkillCategory.programming,
    "skill_back-end": SkillCategory.backend,
    "skill_go": SkillCategory.go,
    "skill_js": SkillCategory.javascript,
    "skill_git": SkillCategory.git,
    "skill_docker": SkillCategory.docker,
    "skill_algo": SkillCategory.algorithm,
}
