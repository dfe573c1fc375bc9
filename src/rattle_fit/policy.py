"""
Role-count driven layout policies.

Vertical space on a page is roughly fixed, so the per-role and summary budgets
shrink as the number of roles grows. ``get_bullets_per_role`` is a ceiling:
FitSettings may tighten it but never loosen it.
"""

from __future__ import annotations

from typing import Any

from rattle_fit.schema import FitSettings, StructuredResume, coerce_resume

CERTIFICATION_SKILLS_CAP = 8
LONG_RESUME_ROLE_COUNT = 5


def get_bullets_per_role(role_count: int) -> int:
    if role_count <= 3:
        return 4
    if role_count == 4:
        return 3
    if role_count == 5:
        return 2
    return 1


def get_summary_max_words(role_count: int) -> int:
    if role_count >= LONG_RESUME_ROLE_COUNT:
        return 55
    return 75


def get_max_skills_shown(has_certifications: bool, base_max: int = 10) -> int:
    """Certifications share the skills column, so they cap how many skills fit."""
    if has_certifications:
        return min(base_max, CERTIFICATION_SKILLS_CAP)
    return base_max


def role_count(resume: StructuredResume | Any) -> int:
    return len(coerce_resume(resume).experience)


def has_certifications(resume: StructuredResume | Any) -> bool:
    return bool(coerce_resume(resume).certifications)


def effective_bullets_per_role(settings: FitSettings, roles: int) -> int:
    """Bullet budget actually applied: the tighter of settings and policy."""
    return min(settings.max_bullets_per_role, get_bullets_per_role(roles))
