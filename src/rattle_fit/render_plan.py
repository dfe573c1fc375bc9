"""
Render plan builder.

Projects a resume and its fit settings into an ordered list of typed content
blocks. Each block carries a priority; blocks below the policy's overflow
threshold render on the first page, the rest on an overflow page.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from rattle_fit.fit_settings import (
    DEFAULT_FIT_POLICY,
    FitPolicy,
    apply_compression_step,
    clamp_compression_level,
    get_initial_fit_settings,
)
from rattle_fit.logger import get_logger
from rattle_fit.policy import LONG_RESUME_ROLE_COUNT, effective_bullets_per_role
from rattle_fit.schema import RenderPlan, SectionBlock, StructuredResume, coerce_resume
from rattle_fit.text_trim import get_display_skills, trim_to_char_limit, trim_to_word_limit, truncate_bullets

logger = get_logger("render_plan")

HEADER_PRIORITY = 0
EXPERIENCE_PRIORITY = 1
SUMMARY_PRIORITY = 2
SKILLS_PRIORITY = 3
CERTIFICATIONS_PRIORITY = 4
EDUCATION_PRIORITY = 5
AWARDS_PRIORITY = 6
CERTIFICATIONS_OVERFLOW_PRIORITY = 14

DEFAULT_TEMPLATE_ID = "modern"


def _certification_blocks(certifications: List[str], roles: int, max_chars: int) -> List[SectionBlock]:
    # Long resumes keep a single certification on page one
    page1_count = 1 if roles >= LONG_RESUME_ROLE_COUNT else len(certifications)
    page1 = [trim_to_char_limit(cert, max_chars) for cert in certifications[:page1_count]]
    overflow = [trim_to_char_limit(cert, max_chars) for cert in certifications[page1_count:]]

    blocks = []
    if page1:
        blocks.append(SectionBlock(type="certifications", data=page1, priority=CERTIFICATIONS_PRIORITY))
    if overflow:
        blocks.append(SectionBlock(type="certifications", data=overflow, priority=CERTIFICATIONS_OVERFLOW_PRIORITY))
    return blocks


def create_render_plan(
    resume: StructuredResume | Any,
    template_id: str = DEFAULT_TEMPLATE_ID,
    compression_level: int = 0,
    policy: Optional[FitPolicy] = None,
) -> RenderPlan:
    """
    Build the paginated block list for a resume at a compression level.

    Args:
        resume: Resume model or raw dict
        template_id: Template the plan is rendered with
        compression_level: Ladder level, clamped to the policy's range
        policy: Fit policy (defaults to DEFAULT_FIT_POLICY)

    Returns:
        RenderPlan with blocks in layout order and their page partitions
    """
    policy = policy or DEFAULT_FIT_POLICY
    resume = coerce_resume(resume)
    level = clamp_compression_level(compression_level, policy)
    fit_settings = apply_compression_step(get_initial_fit_settings(resume, policy), level, policy)

    roles = len(resume.experience)
    max_bullets = effective_bullets_per_role(fit_settings, roles)

    blocks: List[SectionBlock] = [
        SectionBlock(
            type="header",
            data={
                "name": resume.full_name,
                "title": resume.title,
                "contact": resume.contact.model_dump(exclude_none=True),
            },
            priority=HEADER_PRIORITY,
        )
    ]

    if resume.summary:
        blocks.append(SectionBlock(
            type="summary",
            data=trim_to_word_limit(resume.summary, fit_settings.summary_max_words),
            priority=SUMMARY_PRIORITY,
        ))

    if resume.skills:
        skills = get_display_skills(resume.skills, fit_settings.max_skills_shown)
        blocks.append(SectionBlock(type="skills", data=skills.model_dump(), priority=SKILLS_PRIORITY))

    for entry in resume.experience:
        bullets, _ = truncate_bullets(entry.bullets, max_bullets, fit_settings.bullet_max_words)
        data: Dict[str, Any] = entry.model_dump()
        data["bullets"] = bullets
        blocks.append(SectionBlock(type="experience", data=data, priority=EXPERIENCE_PRIORITY))

    if resume.certifications:
        blocks.extend(_certification_blocks(resume.certifications, roles, fit_settings.cert_max_chars))

    if resume.education:
        blocks.append(SectionBlock(
            type="education",
            data={
                "entries": [entry.model_dump() for entry in resume.education],
                "compact": roles >= LONG_RESUME_ROLE_COUNT,
            },
            priority=EDUCATION_PRIORITY,
        ))

    if resume.awards:
        blocks.append(SectionBlock(type="awards", data=list(resume.awards), priority=AWARDS_PRIORITY))

    page1 = [block for block in blocks if block.priority < policy.overflow_priority]
    page2 = [block for block in blocks if block.priority >= policy.overflow_priority]

    logger.debug(
        f"Render plan for '{template_id}' at level {level}: "
        f"{len(page1)} page-1 blocks, {len(page2)} overflow blocks"
    )

    return RenderPlan(
        template_id=template_id,
        compression_level=level,
        fit_settings=fit_settings,
        blocks=blocks,
        page1_sections=page1,
        page2_sections=page2,
        page_count=2 if page2 else 1,
    )
