"""
Builders turning extracted entries into new profile rows.

Values are copied verbatim apart from truncation to the column length, so an
over-long string from the extraction never fails the insert.
"""
from enum import Enum
from typing import Dict, Optional

from sqlalchemy import String

from ..models import (
    WorkExperience, Education, Certificate, Project, Award,
    Volunteering, Language, Accomplishment, Skill,
)
from ..schemas import (
    ExtractedWorkExperience, ExtractedEducation, ExtractedCertificate,
    ExtractedProject, ExtractedAward, ExtractedVolunteering,
    ExtractedLanguage, ExtractedAccomplishment,
)
from .normalizer import normalize_skill_name

MAX_LIST_ITEMS = 20


def _safe_truncate(value: Optional[str], max_len: int) -> Optional[str]:
    """Safely truncate a string to max_len characters."""
    if value is None:
        return None
    return value[:max_len] if len(value) > max_len else value


def column_limit(model, field: str) -> Optional[int]:
    """Length of a String column, or None for unbounded/non-string columns."""
    column_type = model.__table__.c[field].type
    if isinstance(column_type, String):
        return column_type.length
    return None


def fit(model, field: str, value):
    """Truncate value to the column's length when it is a bounded string."""
    if isinstance(value, str) and not isinstance(value, Enum):
        limit = column_limit(model, field)
        if limit:
            return _safe_truncate(value, limit)
    return value


def skill_catalog_name(name: Optional[str]) -> str:
    """The normalized catalog name a skill is stored under."""
    return normalize_skill_name(fit(Skill, "name", normalize_skill_name(name)))


def _list(values) -> list:
    return list(values[:MAX_LIST_ITEMS]) if values else []


def build_work_experience(candidate_id: int, exp: ExtractedWorkExperience) -> WorkExperience:
    return WorkExperience(
        candidate_id=candidate_id,
        title=fit(WorkExperience, "title", exp.title),
        company=fit(WorkExperience, "company", exp.company),
        employment_type=exp.employment_type,
        is_current=exp.is_current,
        start_date=exp.start_date,
        end_date=exp.end_date,
        location=fit(WorkExperience, "location", exp.location),
        description=exp.description,  # Text field, no limit
        skill_ids=_list(exp.skill_ids),
        media_url=fit(WorkExperience, "media_url", exp.media_url),
    )


def build_education(candidate_id: int, edu: ExtractedEducation) -> Education:
    return Education(
        candidate_id=candidate_id,
        degree_diploma=fit(Education, "degree_diploma", edu.degree_diploma),
        university_school=fit(Education, "university_school", edu.university_school),
        field_of_study=fit(Education, "field_of_study", edu.field_of_study),
        description=edu.description,
        start_date=edu.start_date,
        end_date=edu.end_date,
        grade=fit(Education, "grade", edu.grade),
        activities_societies=edu.activities_societies,
        skill_ids=_list(edu.skill_ids),
        media_url=fit(Education, "media_url", edu.media_url),
    )


def build_certificate(candidate_id: int, cert: ExtractedCertificate) -> Certificate:
    return Certificate(
        candidate_id=candidate_id,
        name=fit(Certificate, "name", cert.name),
        issuing_authority=fit(Certificate, "issuing_authority", cert.issuing_authority),
        issue_date=cert.issue_date,
        expiry_date=cert.expiry_date,
        credential_id=fit(Certificate, "credential_id", cert.credential_id),
        credential_url=fit(Certificate, "credential_url", cert.credential_url),
        description=cert.description,
        skill_ids=_list(cert.skill_ids),
        media_url=fit(Certificate, "media_url", cert.media_url),
    )


def build_project(candidate_id: int, proj: ExtractedProject) -> Project:
    return Project(
        candidate_id=candidate_id,
        name=fit(Project, "name", proj.name),
        description=proj.description,
        start_date=proj.start_date,
        end_date=proj.end_date,
        is_current=proj.is_current,
        role=fit(Project, "role", proj.role),
        responsibilities=_list(proj.responsibilities),
        technologies=_list(proj.technologies),
        tools=_list(proj.tools),
        methodologies=_list(proj.methodologies),
        is_confidential=proj.is_confidential,
        can_share_details=proj.can_share_details,
        url=fit(Project, "url", proj.url),
        repository_url=fit(Project, "repository_url", proj.repository_url),
        media_urls=_list(proj.media_urls),
        skills_gained=_list(proj.skills_gained),
    )


def build_award(candidate_id: int, award: ExtractedAward) -> Award:
    return Award(
        candidate_id=candidate_id,
        title=fit(Award, "title", award.title),
        offered_by=fit(Award, "offered_by", award.offered_by),
        associated_with=fit(Award, "associated_with", award.associated_with),
        date=award.date,
        description=award.description,
        media_url=fit(Award, "media_url", award.media_url),
        skill_ids=_list(award.skill_ids),
    )


def build_volunteering(candidate_id: int, vol: ExtractedVolunteering) -> Volunteering:
    return Volunteering(
        candidate_id=candidate_id,
        role=fit(Volunteering, "role", vol.role),
        institution=fit(Volunteering, "institution", vol.institution),
        cause=fit(Volunteering, "cause", vol.cause),
        start_date=vol.start_date,
        end_date=vol.end_date,
        is_current=vol.is_current,
        description=vol.description,
        media_url=fit(Volunteering, "media_url", vol.media_url),
    )


def build_language(candidate_id: int, lang: ExtractedLanguage) -> Language:
    return Language(
        candidate_id=candidate_id,
        language=fit(Language, "language", lang.language),
        is_native=lang.is_native,
        oral_proficiency=lang.oral_proficiency,
        written_proficiency=lang.written_proficiency,
    )


def build_accomplishment(candidate_id: int, item: ExtractedAccomplishment) -> Accomplishment:
    return Accomplishment(
        candidate_id=candidate_id,
        title=fit(Accomplishment, "title", item.title),
        description=item.description,
        work_experience_id=item.work_experience_id,
        resume_id=fit(Accomplishment, "resume_id", item.resume_id),
    )


# Section name -> (model, builder); skills go through the catalog instead
RECORD_BUILDERS: Dict[str, tuple] = {
    "work_experiences": (WorkExperience, build_work_experience),
    "educations": (Education, build_education),
    "certificates": (Certificate, build_certificate),
    "projects": (Project, build_project),
    "awards": (Award, build_award),
    "volunteering": (Volunteering, build_volunteering),
    "languages": (Language, build_language),
    "accomplishments": (Accomplishment, build_accomplishment),
}
