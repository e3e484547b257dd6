from .profile import (
    Candidate, Skill, CandidateSkill,
    WorkExperience, Education, Certificate, Project,
    Award, Volunteering, Language, Accomplishment,
    EmploymentType, LanguageProficiency, Gender, RemotePreference,
    ExperienceLevel, AvailabilityStatus, SalaryVisibility, SkillCategory,
)

__all__ = [
    "Candidate", "Skill", "CandidateSkill",
    # Profile sections
    "WorkExperience", "Education", "Certificate", "Project",
    "Award", "Volunteering", "Language", "Accomplishment",
    # Enums
    "EmploymentType", "LanguageProficiency", "Gender", "RemotePreference",
    "ExperienceLevel", "AvailabilityStatus", "SalaryVisibility", "SkillCategory",
]
