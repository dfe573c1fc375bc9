"""
Centralized data model definitions for the fit engine.

Resume records arrive from the rewrite service and the mobile/web clients in
slightly different shapes (camelCase keys, bullets given as one string, nulls
where lists are expected). The models here validate leniently: anything
malformed is coerced to an empty default instead of being rejected, so the
engine functions built on top of them never have to raise.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from rattle_fit.logger import get_logger

logger = get_logger("schema")

# Bullet separators used when a role description arrives as a single string
_BULLET_SPLIT_RE = re.compile(r"\n|•|-\s")


# ============================================================================
# Coercion helpers
# ============================================================================

def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = _text(value)
    return text if text else None


def _string_list(value: Any) -> List[str]:
    """Coerce a value into a list of strings, dropping anything unusable."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    items = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
    return items


def _optional_string_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    return _string_list(value)


def _mapping_list(value: Any) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


def split_bullets(text: str) -> List[str]:
    """Split a free-text role description into bullet strings."""
    if not text or not text.strip():
        return []
    parts = (part.strip() for part in _BULLET_SPLIT_RE.split(text))
    return [part for part in parts if part]


# ============================================================================
# Resume Schema
# ============================================================================

class Contact(BaseModel):
    """Contact block shown in the resume header."""
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None

    @field_validator("email", "phone", "location", "linkedin", "website", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class ExperienceEntry(BaseModel):
    """One role. ``bullets`` is also accepted under the app key ``description``."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    role: str = ""
    company: str = ""
    location: Optional[str] = None
    dates: str = ""
    bullets: List[str] = Field(default_factory=list, alias="description")

    @field_validator("role", "company", "dates", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("bullets", mode="before")
    @classmethod
    def _coerce_bullets(cls, value: Any) -> List[str]:
        if isinstance(value, str):
            return split_bullets(value)
        return _string_list(value)


class EducationEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    degree: str = ""
    school: str = ""
    location: Optional[str] = None
    dates: Optional[str] = None

    @field_validator("degree", "school", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("location", "dates", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class ProjectEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    description: str = ""
    technologies: Optional[str] = None
    link: Optional[str] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("technologies", "link", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class StructuredResume(BaseModel):
    """Resume document owned by the caller. Experience order is display order."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    full_name: str = Field("", alias="fullName")
    title: str = ""
    contact: Contact = Field(default_factory=Contact)
    summary: str = ""
    skills: List[str] = Field(default_factory=list)
    software: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    awards: Optional[List[str]] = None
    headshot: Optional[str] = None
    projects: Optional[List[ProjectEntry]] = None
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    raw_text: Optional[str] = Field(None, alias="rawText")

    @field_validator("full_name", "title", "summary", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("headshot", "raw_text", mode="before")
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("contact", mode="before")
    @classmethod
    def _coerce_contact(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, Contact)) else {}

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> List[str]:
        return _string_list(value)

    @field_validator("software", "certifications", "awards", mode="before")
    @classmethod
    def _coerce_optional_lists(cls, value: Any) -> Optional[List[str]]:
        return _optional_string_list(value)

    @field_validator("experience", "education", mode="before")
    @classmethod
    def _coerce_entries(cls, value: Any) -> List[Any]:
        return _mapping_list(value)

    @field_validator("projects", mode="before")
    @classmethod
    def _coerce_projects(cls, value: Any) -> Optional[List[Any]]:
        if value is None:
            return None
        return _mapping_list(value)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the client's camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


def coerce_resume(value: Any) -> StructuredResume:
    """Return ``value`` as a StructuredResume, falling back to an empty one."""
    if isinstance(value, StructuredResume):
        return value
    if not isinstance(value, dict):
        if value is not None:
            logger.debug(f"Unsupported resume payload type {type(value).__name__}, using empty resume")
        return StructuredResume()
    try:
        return StructuredResume.model_validate(value)
    except ValidationError as e:
        logger.warning(f"Resume payload failed validation, using empty resume: {e}")
        return StructuredResume()


# ============================================================================
# Fit Engine Schema
# ============================================================================

class FitSettings(BaseModel):
    """Layout budget for one resume at one compression level."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel, extra="ignore")

    max_skills_shown: int = Field(..., ge=0)
    max_bullets_per_role: int = Field(..., ge=0)
    bullet_max_words: int = Field(..., ge=0)
    summary_max_words: int = Field(..., ge=0)
    line_height: float = Field(..., gt=0)
    base_font_size: float = Field(..., gt=0)
    cert_max_chars: int = Field(..., ge=0)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class CompressionStep(BaseModel):
    """Partial FitSettings override; unset fields leave the running value alone."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel, extra="forbid")

    max_skills_shown: Optional[int] = Field(None, ge=0)
    max_bullets_per_role: Optional[int] = Field(None, ge=0)
    bullet_max_words: Optional[int] = Field(None, ge=0)
    summary_max_words: Optional[int] = Field(None, ge=0)
    line_height: Optional[float] = Field(None, gt=0)
    base_font_size: Optional[float] = Field(None, gt=0)
    cert_max_chars: Optional[int] = Field(None, ge=0)

    def overrides(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SpacingTokens(BaseModel):
    """Fixed spacing used by the templates and exporters, in CSS pixels."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel, extra="forbid")

    section_title_margin_bottom: float = 6
    section_padding_bottom: float = 10
    role_block_margin_bottom: float = 10
    bullet_list_margin_top: float = 4
    bullet_item_margin: float = 2
    sidebar_width_in: float = 2.35
    bullet_padding_left_em: float = 1.1

    def as_css(self) -> Dict[str, str]:
        return {
            "sectionTitleMarginBottom": f"{self.section_title_margin_bottom:g}px",
            "sectionPaddingBottom": f"{self.section_padding_bottom:g}px",
            "roleBlockMarginBottom": f"{self.role_block_margin_bottom:g}px",
            "bulletListMarginTop": f"{self.bullet_list_margin_top:g}px",
            "bulletItemMargin": f"{self.bullet_item_margin:g}px 0",
            "sidebarWidth": f"{self.sidebar_width_in:g}in",
            "bulletPaddingLeft": f"{self.bullet_padding_left_em:g}em",
        }


class DisplaySkills(BaseModel):
    model_config = ConfigDict(frozen=True)

    visible: List[str] = Field(default_factory=list)
    overflow: int = 0


SectionType = Literal["header", "summary", "skills", "experience", "certifications", "education", "awards"]


class SectionBlock(BaseModel):
    """A typed chunk of resume content; ``priority`` decides its page."""
    model_config = ConfigDict(frozen=True)

    type: SectionType
    data: Any = None
    priority: int


class RenderPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    template_id: str
    compression_level: int
    fit_settings: FitSettings
    blocks: List[SectionBlock] = Field(default_factory=list)
    page1_sections: List[SectionBlock] = Field(default_factory=list)
    page2_sections: List[SectionBlock] = Field(default_factory=list)
    page_count: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
