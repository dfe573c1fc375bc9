"""
Content constraints applied before layout fitting.

Where ``fit_constraints`` only cuts text to a numeric budget, this module
tightens the writing itself: filler phrases are removed, bullets start with a
capitalised verb instead of a pronoun, duplicate skills collapse, and the
summary is held to a few sentences.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from rattle_fit.logger import get_logger
from rattle_fit.policy import get_bullets_per_role
from rattle_fit.schema import StructuredResume, coerce_resume

logger = get_logger("content_constraints")

FILLER_PHRASES = [
    "responsible for",
    "was responsible for",
    "duties included",
    "helped to",
    "assisted with",
    "worked on",
    "was involved in",
    "participated in",
    "in charge of",
    "tasked with",
    "various",
    "multiple",
    "numerous",
    "successfully",
    "effectively",
    "efficiently",
]

STRONG_VERBS = [
    "Achieved", "Accelerated", "Accomplished", "Administered", "Analyzed",
    "Architected", "Automated", "Built", "Championed", "Collaborated",
    "Consolidated", "Coordinated", "Created", "Decreased", "Delivered",
    "Designed", "Developed", "Directed", "Drove", "Eliminated",
    "Engineered", "Established", "Exceeded", "Executed", "Expanded",
    "Generated", "Grew", "Headed", "Identified", "Implemented",
    "Improved", "Increased", "Initiated", "Innovated", "Integrated",
    "Launched", "Led", "Managed", "Mentored", "Modernized",
    "Negotiated", "Optimized", "Orchestrated", "Oversaw", "Pioneered",
    "Produced", "Proposed", "Reduced", "Redesigned", "Resolved",
    "Restructured", "Revamped", "Scaled", "Spearheaded", "Standardized",
    "Streamlined", "Strengthened", "Transformed", "Upgraded",
]

# Longest phrases first so "was responsible for" wins over "responsible for"
_FILLER_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(p) for p in sorted(FILLER_PHRASES, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)
_PRONOUN_RE = re.compile(r"^(?:I|We|My|Our)\s+", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_SKILL_KEY_RE = re.compile(r"[-_\s]")
_STRONG_VERB_FORMS = frozenset(
    form for verb in STRONG_VERBS for form in (verb.lower(), verb.lower() + "d", verb.lower() + "ed")
)

MAX_SUMMARY_SENTENCES = 3


class ConstraintOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    max_summary_words: int = 70
    max_summary_chars: int = 450
    max_skills: int = 12
    max_software: int = 12
    max_education: int = 2
    max_bullet_chars: int = 115
    max_skill_chars: int = 24
    max_certifications: int = 5
    max_awards: int = 5


class ConstraintStats(BaseModel):
    summary_word_count: int
    summary_char_count: int
    experience_count: int
    avg_bullets_per_role: int
    strong_verb_bullets: int
    skill_count: int
    software_count: int
    education_count: int


def remove_filler(text: str) -> str:
    return _MULTI_SPACE_RE.sub(" ", _FILLER_RE.sub("", text)).strip()


def starts_with_strong_verb(bullet: str) -> bool:
    words = bullet.split()
    return bool(words) and words[0].lower() in _STRONG_VERB_FORMS


def ensure_strong_verb(bullet: str) -> str:
    """Drop a leading pronoun and capitalise the first letter."""
    cleaned = _PRONOUN_RE.sub("", bullet.strip())
    if cleaned:
        cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned


def constrain_bullet(bullet: str, max_chars: int) -> str:
    constrained = ensure_strong_verb(remove_filler(bullet))
    if len(constrained) <= max_chars:
        return constrained

    result = ""
    for word in constrained.split():
        candidate = f"{result} {word}".strip()
        if len(candidate) > max_chars - 3:
            break
        result = candidate
    return result if result.endswith(".") else result + "."


def constrain_summary(summary: str, options: ConstraintOptions) -> str:
    if not summary:
        return ""

    constrained = _MULTI_SPACE_RE.sub(" ", summary).strip()
    sentences = _SENTENCE_SPLIT_RE.split(constrained)
    constrained = " ".join(sentences[:MAX_SUMMARY_SENTENCES])

    if len(constrained) > options.max_summary_chars:
        constrained = constrained[:options.max_summary_chars - 3].strip() + "..."

    words = constrained.split()
    if len(words) > options.max_summary_words:
        constrained = " ".join(words[:options.max_summary_words])
        if not constrained.endswith("."):
            constrained += "."

    return constrained


def dedupe_skills(items: Optional[Sequence[str]], max_items: int, max_chars: Optional[int] = None) -> List[str]:
    """Strip, drop over-long entries and collapse case/separator duplicates."""
    unique: List[str] = []
    seen = set()
    for item in items or []:
        item = item.strip()
        if not item or (max_chars is not None and len(item) > max_chars):
            continue
        key = _SKILL_KEY_RE.sub("", item.lower())
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique[:max_items]


def apply_resume_constraints(
    resume: StructuredResume | Any,
    options: Optional[ConstraintOptions] = None,
) -> StructuredResume:
    """Return a tightened copy of ``resume``; the input is left untouched."""
    options = options or ConstraintOptions()
    resume = coerce_resume(resume)
    bullets_per_role = get_bullets_per_role(len(resume.experience))

    experience = [
        entry.model_copy(update={
            "bullets": [constrain_bullet(b, options.max_bullet_chars) for b in entry.bullets[:bullets_per_role]],
        })
        for entry in resume.experience
    ]

    education = [
        entry.model_copy(update={"degree": entry.degree.strip(), "school": entry.school.strip()})
        for entry in resume.education[:options.max_education]
    ]

    software = dedupe_skills(resume.software, options.max_software) if resume.software else None

    constrained = resume.model_copy(deep=True, update={
        "summary": constrain_summary(resume.summary, options),
        "experience": experience,
        "skills": dedupe_skills(resume.skills, options.max_skills, options.max_skill_chars),
        "software": software or None,
        "education": education,
        "certifications": None if resume.certifications is None else resume.certifications[:options.max_certifications],
        "awards": None if resume.awards is None else resume.awards[:options.max_awards],
    })

    logger.debug(
        f"Content constraints: skills {len(resume.skills)} -> {len(constrained.skills)}, "
        f"education {len(resume.education)} -> {len(constrained.education)}"
    )
    return constrained


def get_constraint_stats(resume: StructuredResume | Any) -> ConstraintStats:
    resume = coerce_resume(resume)
    bullets = [bullet for entry in resume.experience for bullet in entry.bullets]
    experience_count = len(resume.experience)

    return ConstraintStats(
        summary_word_count=len(resume.summary.split()),
        summary_char_count=len(resume.summary),
        experience_count=experience_count,
        avg_bullets_per_role=int(len(bullets) / experience_count + 0.5) if experience_count else 0,
        strong_verb_bullets=sum(1 for bullet in bullets if starts_with_strong_verb(bullet)),
        skill_count=len(resume.skills),
        software_count=len(resume.software or []),
        education_count=len(resume.education),
    )
