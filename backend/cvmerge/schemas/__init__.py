from .extraction import (
    ExtractedProfileData, ExtractedBasicInfo,
    ExtractedWorkExperience, ExtractedEducation, ExtractedCertificate,
    ExtractedProject, ExtractedSkill, ExtractedAward, ExtractedVolunteering,
    ExtractedLanguage, ExtractedAccomplishment,
    SECTION_FIELDS,
)
from .merge import MergeResult, MergeResponse, SectionCounts

__all__ = [
    "ExtractedProfileData", "ExtractedBasicInfo",
    "ExtractedWorkExperience", "ExtractedEducation", "ExtractedCertificate",
    "ExtractedProject", "ExtractedSkill", "ExtractedAward", "ExtractedVolunteering",
    "ExtractedLanguage", "ExtractedAccomplishment",
    "SECTION_FIELDS",
    "MergeResult", "MergeResponse", "SectionCounts",
]
