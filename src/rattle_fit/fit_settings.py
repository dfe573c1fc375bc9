"""
Fit settings and the compression ladder.

A FitPolicy bundles the level-0 defaults with an ordered ladder of partial
overrides. Compressing to level N folds steps ``[0, N)`` into the settings,
taking the field-wise minimum, so every field only ever shrinks as the level
grows and re-applying a level to its own output changes nothing.

The policy is passed explicitly to every entry point; ``DEFAULT_FIT_POLICY``
is an immutable value used when the caller does not supply one.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rattle_fit.logger import get_logger
from rattle_fit.policy import get_bullets_per_role, get_max_skills_shown, get_summary_max_words
from rattle_fit.schema import CompressionStep, FitSettings, SpacingTokens, StructuredResume, coerce_resume

logger = get_logger("fit_settings")

# Least disruptive first: these must all come before any LATE_FIELDS step
EARLY_FIELDS = frozenset({"max_skills_shown", "bullet_max_words", "summary_max_words", "cert_max_chars"})
LATE_FIELDS = frozenset({"max_bullets_per_role", "base_font_size", "line_height"})

DEFAULT_FIT_SETTINGS = FitSettings(
    max_skills_shown=10,
    max_bullets_per_role=4,
    bullet_max_words=16,
    summary_max_words=75,
    line_height=1.28,
    base_font_size=11.5,
    cert_max_chars=90,
)

DEFAULT_COMPRESSION_STEPS: Tuple[CompressionStep, ...] = (
    CompressionStep(max_skills_shown=8),
    CompressionStep(max_skills_shown=6),
    CompressionStep(bullet_max_words=14),
    CompressionStep(bullet_max_words=12),
    CompressionStep(summary_max_words=60),
    CompressionStep(summary_max_words=45),
    CompressionStep(max_bullets_per_role=3),
    CompressionStep(max_bullets_per_role=2),
    CompressionStep(max_bullets_per_role=1),
    CompressionStep(base_font_size=11.0),
)


def validate_compression_steps(steps: Sequence[CompressionStep]) -> Tuple[bool, List[str]]:
    """
    Check that a ladder is usable.

    Rules:
        - every step overrides at least one field
        - a field never grows relative to an earlier step for the same field
        - skill/word/char trims never follow a bullet-count or font trim

    Returns:
        Tuple of (is_valid, errors)
    """
    errors: List[str] = []
    last_seen: dict = {}
    first_late_step: Optional[int] = None

    for index, step in enumerate(steps):
        overrides = step.overrides()
        if not overrides:
            errors.append(f"step {index} has no overrides")
            continue

        for field, value in overrides.items():
            previous = last_seen.get(field)
            if previous is not None and value > previous:
                errors.append(f"step {index} raises {field} from {previous} to {value}")
            last_seen[field] = value

        fields = set(overrides)
        if fields & EARLY_FIELDS and first_late_step is not None:
            early = ", ".join(sorted(fields & EARLY_FIELDS))
            errors.append(f"step {index} trims {early} after the bullet/font trim at step {first_late_step}")
        if fields & LATE_FIELDS and first_late_step is None:
            first_late_step = index

    return len(errors) == 0, errors


class FitPolicy(BaseModel):
    """Injected engine configuration: defaults, ladder and page split threshold."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "screen"
    defaults: FitSettings = DEFAULT_FIT_SETTINGS
    compression_steps: Tuple[CompressionStep, ...] = DEFAULT_COMPRESSION_STEPS
    spacing: SpacingTokens = Field(default_factory=SpacingTokens)
    overflow_priority: int = Field(10, ge=1)

    @model_validator(mode="after")
    def _check_ladder(self) -> "FitPolicy":
        is_valid, errors = validate_compression_steps(self.compression_steps)
        if not is_valid:
            raise ValueError("invalid compression ladder: " + "; ".join(errors))
        return self

    @property
    def max_compression_level(self) -> int:
        return len(self.compression_steps)


DEFAULT_FIT_POLICY = FitPolicy()
MAX_COMPRESSION_LEVEL = DEFAULT_FIT_POLICY.max_compression_level


def get_initial_fit_settings(resume: StructuredResume | Any, policy: Optional[FitPolicy] = None) -> FitSettings:
    """Level-0 settings for a resume: policy defaults tuned by role count and certifications."""
    policy = policy or DEFAULT_FIT_POLICY
    resume = coerce_resume(resume)
    roles = len(resume.experience)

    return policy.defaults.model_copy(update={
        "max_bullets_per_role": get_bullets_per_role(roles),
        "max_skills_shown": get_max_skills_shown(bool(resume.certifications), policy.defaults.max_skills_shown),
        "summary_max_words": get_summary_max_words(roles),
    })


def clamp_compression_level(compression_level: int, policy: Optional[FitPolicy] = None) -> int:
    policy = policy or DEFAULT_FIT_POLICY
    return max(0, min(compression_level, policy.max_compression_level))


def apply_compression_step(
    current_settings: FitSettings,
    compression_level: int,
    policy: Optional[FitPolicy] = None,
) -> FitSettings:
    """
    Fold the first ``compression_level`` ladder steps into ``current_settings``.

    Levels at or below zero return ``current_settings`` unchanged; levels past
    the end of the ladder are treated as the last level.
    """
    policy = policy or DEFAULT_FIT_POLICY
    if compression_level <= 0:
        return current_settings

    level = clamp_compression_level(compression_level, policy)
    values = current_settings.model_dump()
    for step in policy.compression_steps[:level]:
        for field, override in step.overrides().items():
            values[field] = min(values[field], override)

    logger.debug(f"Compression level {level}/{policy.max_compression_level} -> {values}")
    return current_settings.model_copy(update=values)
