"""
Resume fit and compression engine for Rattle.

This package contains:
- text_trim / policy: pure trimming primitives and role-count policies
- fit_settings: FitSettings defaults and the compression ladder
- render_plan / fit_constraints: paginated block plans and reduced resumes
- fit_loop: the measure/compress/re-render state machine
- content_constraints: writing cleanup applied before fitting
"""

from .schema import (
    CompressionStep,
    DisplaySkills,
    FitSettings,
    RenderPlan,
    SectionBlock,
    StructuredResume,
    coerce_resume,
)
from .text_trim import get_display_skills, trim_to_char_limit, trim_to_word_limit
from .policy import get_bullets_per_role, get_max_skills_shown, get_summary_max_words
from .fit_settings import (
    DEFAULT_FIT_POLICY,
    DEFAULT_FIT_SETTINGS,
    MAX_COMPRESSION_LEVEL,
    FitPolicy,
    apply_compression_step,
    get_initial_fit_settings,
)
from .render_plan import create_render_plan
from .fit_constraints import apply_fit_constraints
from .fit_loop import FitController, FitOutcome, FitState, fit_resume
from .content_constraints import ConstraintOptions, apply_resume_constraints, get_constraint_stats
from .config import FitConfigError, load_fit_policy

__all__ = [
    "CompressionStep",
    "DisplaySkills",
    "FitSettings",
    "RenderPlan",
    "SectionBlock",
    "StructuredResume",
    "coerce_resume",
    "get_display_skills",
    "trim_to_char_limit",
    "trim_to_word_limit",
    "get_bullets_per_role",
    "get_max_skills_shown",
    "get_summary_max_words",
    "DEFAULT_FIT_POLICY",
    "DEFAULT_FIT_SETTINGS",
    "MAX_COMPRESSION_LEVEL",
    "FitPolicy",
    "apply_compression_step",
    "get_initial_fit_settings",
    "create_render_plan",
    "apply_fit_constraints",
    "FitController",
    "FitOutcome",
    "FitState",
    "fit_resume",
    "ConstraintOptions",
    "apply_resume_constraints",
    "get_constraint_stats",
    "FitConfigError",
    "load_fit_policy",
]
