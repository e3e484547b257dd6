"""
Schemas for the structured record produced by the CV extraction service.

Extraction output is only loosely trustworthy: blanks, "null" strings, odd
date formats and out-of-vocabulary enum values all show up in practice. The
validators below coerce those to ``None`` instead of rejecting the whole
payload. Only structural problems (a section that is not a list, an entry
that is not an object) fail validation.
"""
import datetime as dt
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional, Type
from pydantic import BaseModel, Field, field_validator, model_validator

from ..models import (
    EmploymentType, LanguageProficiency, Gender, RemotePreference,
    ExperienceLevel, AvailabilityStatus, SalaryVisibility, SkillCategory,
)

_NULL_MARKERS = {"null", "none", "n/a", "na", "nil", "undefined"}
_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y/%m/%d", "%d/%m/%Y", "%Y")
_TRUE_MARKERS = {"true", "yes", "y", "1"}
_FALSE_MARKERS = {"false", "no", "n", "0"}

# Word-level proficiencies some extractions return instead of 0-100
_PROFICIENCY_WORDS = {
    "expert": 90,
    "advanced": 75,
    "intermediate": 60,
    "beginner": 30,
    "basic": 30,
}


def clean_text(value: Any) -> Optional[str]:
    """Strip a scalar to a string, mapping blanks and null markers to None."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    value = value.strip()
    if not value or value.lower() in _NULL_MARKERS:
        return None
    return value


def coerce_date(value: Any) -> Optional[date]:
    """Accept YYYY-MM-DD, YYYY-MM, YYYY and a few common variants."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    text = clean_text(value) if isinstance(value, str) or value is None else None
    if not text:
        return None
    # ISO datetimes: keep the date part
    if "T" in text:
        text = text.split("T", 1)[0]
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def coerce_enum(enum_cls: Type[Enum], value: Any) -> Optional[Enum]:
    """Map a loose string onto a closed enum, or None if it is not a member."""
    if value is None or isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return enum_cls(key)
    except ValueError:
        return None


def coerce_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().replace(",", ""))
        except ValueError:
            return None
    return None


def coerce_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_MARKERS:
            return True
        if lowered in _FALSE_MARKERS:
            return False
    return None


def coerce_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"expected a list of strings, got {type(value).__name__}")
    items = []
    for item in value:
        if isinstance(item, (dict, list)):
            raise ValueError("expected a list of strings")
        text = clean_text(item)
        if text:
            items.append(text)
    return items


def coerce_proficiency(value: Any) -> Optional[int]:
    """Clamp a 0-100 proficiency; word levels map to representative scores."""
    if isinstance(value, str) and value.strip().lower() in _PROFICIENCY_WORDS:
        return _PROFICIENCY_WORDS[value.strip().lower()]
    number = coerce_number(value)
    if number is None:
        return None
    return int(round(min(max(number, 0), 100)))


# ============================================================================
# Repeating sections
# ============================================================================

class _ExtractedEntry(BaseModel):
    """Base for extracted section entries; unknown keys are ignored."""

    class Config:
        extra = "ignore"


class ExtractedWorkExperience(_ExtractedEntry):
    title: Optional[str] = None
    company: Optional[str] = None
    employment_type: Optional[EmploymentType] = None
    is_current: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    location: Optional[str] = None
    description: Optional[str] = None
    skill_ids: List[str] = Field(default_factory=list)
    media_url: Optional[str] = None

    @field_validator("title", "company", "location", "description", "media_url", mode="before")
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("employment_type", mode="before")
    @classmethod
    def _employment_type(cls, value):
        return coerce_enum(EmploymentType, value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return coerce_date(value)

    @field_validator("is_current", mode="before")
    @classmethod
    def _flag(cls, value):
        return bool(coerce_bool(value))

    @field_validator("skill_ids", mode="before")
    @classmethod
    def _lists(cls, value):
        return coerce_str_list(value)


class ExtractedEducation(_ExtractedEntry):
    degree_diploma: Optional[str] = None
    university_school: Optional[str] = None
    field_of_study: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    grade: Optional[str] = None
    activities_societies: Optional[str] = None
    skill_ids: List[str] = Field(default_factory=list)
    media_url: Optional[str] = None

    @field_validator(
        "degree_diploma", "university_school", "field_of_study", "description",
        "grade", "activities_societies", "media_url", mode="before",
    )
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return coerce_date(value)

    @field_validator("skill_ids", mode="before")
    @classmethod
    def _lists(cls, value):
        return coerce_str_list(value)


class ExtractedCertificate(_ExtractedEntry):
    name: Optional[str] = None
    issuing_authority: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    skill_ids: List[str] = Field(default_factory=list)
    media_url: Optional[str] = None

    @field_validator(
        "name", "issuing_authority", "credential_id", "credential_url",
        "description", "media_url", mode="before",
    )
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("issue_date", "expiry_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return coerce_date(value)

    @field_validator("skill_ids", mode="before")
    @classmethod
    def _lists(cls, value):
        return coerce_str_list(value)


class ExtractedProject(_ExtractedEntry):
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    role: Optional[str] = None
    responsibilities: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    methodologies: List[str] = Field(default_factory=list)
    is_confidential: bool = False
    can_share_details: bool = True
    url: Optional[str] = None
    repository_url: Optional[str] = None
    media_urls: List[str] = Field(default_factory=list)
    skills_gained: List[str] = Field(default_factory=list)

    @field_validator("name", "description", "role", "url", "repository_url", mode="before")
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return coerce_date(value)

    @field_validator("is_current", "is_confidential", mode="before")
    @classmethod
    def _flags(cls, value):
        return bool(coerce_bool(value))

    @field_validator("can_share_details", mode="before")
    @classmethod
    def _share_flag(cls, value):
        flag = coerce_bool(value)
        return True if flag is None else flag

    @field_validator(
        "responsibilities", "technologies", "tools", "methodologies",
        "media_urls", "skills_gained", mode="before",
    )
    @classmethod
    def _lists(cls, value):
        return coerce_str_list(value)


class ExtractedSkill(_ExtractedEntry):
    name: Optional[str] = None
    category: SkillCategory = SkillCategory.OTHER
    description: Optional[str] = None
    proficiency: Optional[int] = None  # 0-100

    @field_validator("name", "description", mode="before")
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value):
        return coerce_enum(SkillCategory, value) or SkillCategory.OTHER

    @field_validator("proficiency", mode="before")
    @classmethod
    def _proficiency(cls, value):
        return coerce_proficiency(value)


class ExtractedAward(_ExtractedEntry):
    title: Optional[str] = None
    offered_by: Optional[str] = None
    associated_with: Optional[str] = None
    date: Optional[dt.date] = None
    description: Optional[str] = None
    media_url: Optional[str] = None
    skill_ids: List[str] = Field(default_factory=list)

    @field_validator("title", "offered_by", "associated_with", "description", "media_url", mode="before")
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("date", mode="before")
    @classmethod
    def _dates(cls, value):
        return coerce_date(value)

    @field_validator("skill_ids", mode="before")
    @classmethod
    def _lists(cls, value):
        return coerce_str_list(value)


class ExtractedVolunteering(_ExtractedEntry):
    role: Optional[str] = None
    institution: Optional[str] = None
    cause: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = None
    media_url: Optional[str] = None

    @field_validator("role", "institution", "cause", "description", "media_url", mode="before")
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return coerce_date(value)

    @field_validator("is_current", mode="before")
    @classmethod
    def _flag(cls, value):
        return bool(coerce_bool(value))


class ExtractedLanguage(_ExtractedEntry):
    language: Optional[str] = None
    is_native: bool = False
    oral_proficiency: Optional[LanguageProficiency] = None
    written_proficiency: Optional[LanguageProficiency] = None

    @field_validator("language", mode="before")
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("is_native", mode="before")
    @classmethod
    def _flag(cls, value):
        return bool(coerce_bool(value))

    @field_validator("oral_proficiency", "written_proficiency", mode="before")
    @classmethod
    def _proficiency(cls, value):
        return coerce_enum(LanguageProficiency, value)


class ExtractedAccomplishment(_ExtractedEntry):
    title: Optional[str] = None
    description: Optional[str] = None
    work_experience_id: Optional[int] = None
    resume_id: Optional[str] = None

    @field_validator("title", "description", "resume_id", mode="before")
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator("work_experience_id", mode="before")
    @classmethod
    def _work_experience_ref(cls, value):
        number = coerce_number(value)
        if number is None or number != int(number):
            return None
        return int(number)


# ============================================================================
# Basic info
# ============================================================================

class ExtractedBasicInfo(BaseModel):
    """Scalar profile fields; every one is optional"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    current_position: Optional[str] = None
    industry: Optional[str] = None
    bio: Optional[str] = None
    about: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    phone1: Optional[str] = None
    phone2: Optional[str] = None
    personal_website: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    years_of_experience: Optional[float] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[date] = None
    nic: Optional[str] = None
    passport: Optional[str] = None
    remote_preference: Optional[RemotePreference] = None
    experience_level: Optional[ExperienceLevel] = None
    expected_salary_min: Optional[float] = None
    expected_salary_max: Optional[float] = None
    currency: Optional[str] = None
    availability_status: Optional[AvailabilityStatus] = None
    availability_date: Optional[date] = None
    professional_summary: Optional[str] = None
    total_years_experience: Optional[float] = None
    open_to_relocation: Optional[bool] = None
    willing_to_travel: Optional[bool] = None
    security_clearance: Optional[bool] = None
    disability_status: Optional[str] = None
    veteran_status: Optional[str] = None
    pronouns: Optional[str] = None
    salary_visibility: Optional[SalaryVisibility] = None
    notice_period: Optional[int] = None
    work_authorization: Optional[str] = None
    visa_assistance_needed: Optional[bool] = None
    work_availability: Optional[EmploymentType] = None
    interview_ready: Optional[bool] = None
    pre_qualified: Optional[bool] = None

    class Config:
        extra = "ignore"

    @field_validator(
        "first_name", "last_name", "title", "current_position", "industry", "bio",
        "about", "country", "city", "location", "address", "phone1", "phone2",
        "personal_website", "github_url", "linkedin_url", "portfolio_url", "nic",
        "passport", "currency", "professional_summary", "disability_status",
        "veteran_status", "pronouns", "work_authorization", mode="before",
    )
    @classmethod
    def _text(cls, value):
        return clean_text(value)

    @field_validator(
        "years_of_experience", "expected_salary_min", "expected_salary_max",
        "total_years_experience", mode="before",
    )
    @classmethod
    def _numbers(cls, value):
        return coerce_number(value)

    @field_validator("notice_period", mode="before")
    @classmethod
    def _whole_number(cls, value):
        number = coerce_number(value)
        return None if number is None else int(round(number))

    @field_validator("date_of_birth", "availability_date", mode="before")
    @classmethod
    def _dates(cls, value):
        return coerce_date(value)

    @field_validator(
        "open_to_relocation", "willing_to_travel", "security_clearance",
        "visa_assistance_needed", "interview_ready", "pre_qualified", mode="before",
    )
    @classmethod
    def _flags(cls, value):
        return coerce_bool(value)

    @field_validator("gender", mode="before")
    @classmethod
    def _gender(cls, value):
        return coerce_enum(Gender, value)

    @field_validator("remote_preference", mode="before")
    @classmethod
    def _remote_preference(cls, value):
        return coerce_enum(RemotePreference, value)

    @field_validator("experience_level", mode="before")
    @classmethod
    def _experience_level(cls, value):
        return coerce_enum(ExperienceLevel, value)

    @field_validator("availability_status", mode="before")
    @classmethod
    def _availability_status(cls, value):
        return coerce_enum(AvailabilityStatus, value)

    @field_validator("salary_visibility", mode="before")
    @classmethod
    def _salary_visibility(cls, value):
        return coerce_enum(SalaryVisibility, value)

    @field_validator("work_availability", mode="before")
    @classmethod
    def _work_availability(cls, value):
        return coerce_enum(EmploymentType, value)


# ============================================================================
# Full payload
# ============================================================================

SECTION_FIELDS = (
    "work_experiences", "educations", "certificates", "projects", "skills",
    "awards", "volunteering", "languages", "accomplishments",
)


class ExtractedProfileData(BaseModel):
    """Complete extraction payload, consumed as-is by the merge engine"""
    basic_info: ExtractedBasicInfo = Field(default_factory=ExtractedBasicInfo)
    work_experiences: List[ExtractedWorkExperience] = Field(default_factory=list)
    educations: List[ExtractedEducation] = Field(default_factory=list)
    certificates: List[ExtractedCertificate] = Field(default_factory=list)
    projects: List[ExtractedProject] = Field(default_factory=list)
    skills: List[ExtractedSkill] = Field(default_factory=list)
    awards: List[ExtractedAward] = Field(default_factory=list)
    volunteering: List[ExtractedVolunteering] = Field(default_factory=list)
    languages: List[ExtractedLanguage] = Field(default_factory=list)
    accomplishments: List[ExtractedAccomplishment] = Field(default_factory=list)

    class Config:
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def _null_sections(cls, data):
        # Extraction returns null for sections it found nothing for
        if isinstance(data, dict):
            data = dict(data)
            for key in SECTION_FIELDS:
                if key in data and data[key] is None:
                    data[key] = []
            if data.get("basic_info") is None:
                data.pop("basic_info", None)
        return data

    def summary(self) -> dict:
        """Per-section entry counts, as reported back to the caller"""
        return {f"{key}_count": len(getattr(self, key)) for key in SECTION_FIELDS}
