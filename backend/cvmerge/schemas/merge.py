"""
Schemas describing the outcome of a CV merge
"""
from typing import Dict, List
from pydantic import BaseModel, Field


class SectionCounts(BaseModel):
    """One counter per repeating profile section"""
    work_experiences: int = 0
    educations: int = 0
    certificates: int = 0
    projects: int = 0
    skills: int = 0
    awards: int = 0
    volunteering: int = 0
    languages: int = 0
    accomplishments: int = 0


class MergeResult(BaseModel):
    basic_info_updated: bool = False
    basic_info_fields: List[str] = Field(default_factory=list)

    new_work_experiences: int = 0
    new_educations: int = 0
    new_certificates: int = 0
    new_projects: int = 0
    new_skills: int = 0
    new_awards: int = 0
    new_volunteering: int = 0
    new_languages: int = 0
    new_accomplishments: int = 0

    skipped_duplicates: SectionCounts = Field(default_factory=SectionCounts)
    # Entries dropped for missing identifying fields; never counted as duplicates
    skipped_invalid: SectionCounts = Field(default_factory=SectionCounts)

    @property
    def total_created(self) -> int:
        return sum(getattr(self, f"new_{section}") for section in SectionCounts.model_fields)


class MergeResponse(BaseModel):
    success: bool = True
    message: str
    merge_results: MergeResult
    extracted_summary: Dict[str, int] = Field(default_factory=dict)
