"""Shrink resume text and lists to a given FitSettings budget."""

from __future__ import annotations

from typing import Any

from rattle_fit.policy import effective_bullets_per_role
from rattle_fit.schema import FitSettings, StructuredResume, coerce_resume
from rattle_fit.text_trim import trim_to_char_limit, trim_to_word_limit, truncate_bullets


def apply_fit_constraints(resume: StructuredResume | Any, fit_settings: FitSettings) -> StructuredResume:
    """
    Return a copy of ``resume`` cut down to ``fit_settings``.

    Bullets, summary and certifications are trimmed; skills, education,
    awards and contact pass through untouched. The input is never mutated,
    and applying the same settings twice gives the same result as once.
    """
    resume = coerce_resume(resume)
    max_bullets = effective_bullets_per_role(fit_settings, len(resume.experience))

    experience = []
    for entry in resume.experience:
        bullets, _ = truncate_bullets(entry.bullets, max_bullets, fit_settings.bullet_max_words)
        experience.append(entry.model_copy(update={"bullets": bullets}))

    certifications = None
    if resume.certifications is not None:
        certifications = [trim_to_char_limit(cert, fit_settings.cert_max_chars) for cert in resume.certifications]

    return resume.model_copy(deep=True, update={
        "experience": experience,
        "summary": trim_to_word_limit(resume.summary, fit_settings.summary_max_words),
        "certifications": certifications,
    })
