"""
Candidate profile models: the aggregate root, its repeating sections and the
shared skill catalog.
"""
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Date, Boolean, Float,
    ForeignKey, UniqueConstraint, Enum as SQLEnum, JSON
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base
import enum


class EmploymentType(str, enum.Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    FREELANCE = "freelance"
    VOLUNTEER = "volunteer"


class LanguageProficiency(str, enum.Enum):
    NATIVE = "native"
    FLUENT = "fluent"
    PROFESSIONAL = "professional"
    CONVERSATIONAL = "conversational"
    BASIC = "basic"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class RemotePreference(str, enum.Enum):
    REMOTE_ONLY = "remote_only"
    HYBRID = "hybrid"
    ONSITE = "onsite"
    FLEXIBLE = "flexible"


class ExperienceLevel(str, enum.Enum):
    ENTRY = "entry"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    PRINCIPAL = "principal"


class AvailabilityStatus(str, enum.Enum):
    AVAILABLE = "available"
    OPEN_TO_OPPORTUNITIES = "open_to_opportunities"
    NOT_LOOKING = "not_looking"


class SalaryVisibility(str, enum.Enum):
    CONFIDENTIAL = "confidential"
    VISIBLE = "visible"


class SkillCategory(str, enum.Enum):
    LANGUAGE = "language"
    FRAMEWORK = "framework"
    DATABASE = "database"
    CLOUD = "cloud"
    TOOL = "tool"
    SOFT_SKILL = "soft_skill"
    OTHER = "other"


class Candidate(Base):
    """Candidate profile; basic info lives directly on this row"""
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(100), unique=True, nullable=True)

    # Identity
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    title = Column(String(200), nullable=True)
    current_position = Column(String(200), nullable=True)
    industry = Column(String(200), nullable=True)
    bio = Column(Text, nullable=True)
    about = Column(Text, nullable=True)
    professional_summary = Column(Text, nullable=True)
    pronouns = Column(String(50), nullable=True)
    gender = Column(SQLEnum(Gender), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    nic = Column(String(50), nullable=True)
    passport = Column(String(50), nullable=True)

    # Contact & Links
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    location = Column(String(200), nullable=True)
    address = Column(String(500), nullable=True)
    phone1 = Column(String(50), nullable=True)
    phone2 = Column(String(50), nullable=True)
    personal_website = Column(String(500), nullable=True)
    github_url = Column(String(500), nullable=True)
    linkedin_url = Column(String(500), nullable=True)
    portfolio_url = Column(String(500), nullable=True)

    # Experience & preferences
    years_of_experience = Column(Float, nullable=True)
    total_years_experience = Column(Float, nullable=True)
    experience_level = Column(SQLEnum(ExperienceLevel), nullable=True)
    remote_preference = Column(SQLEnum(RemotePreference), nullable=True)
    expected_salary_min = Column(Float, nullable=True)
    expected_salary_max = Column(Float, nullable=True)
    currency = Column(String(10), nullable=True)
    salary_visibility = Column(SQLEnum(SalaryVisibility), nullable=True)
    availability_status = Column(SQLEnum(AvailabilityStatus), nullable=True)
    availability_date = Column(Date, nullable=True)
    notice_period = Column(Integer, nullable=True)  # days
    work_availability = Column(SQLEnum(EmploymentType), nullable=True)
    work_authorization = Column(String(200), nullable=True)
    visa_assistance_needed = Column(Boolean, nullable=True)
    open_to_relocation = Column(Boolean, nullable=True)
    willing_to_travel = Column(Boolean, nullable=True)
    security_clearance = Column(Boolean, nullable=True)
    disability_status = Column(String(100), nullable=True)
    veteran_status = Column(String(100), nullable=True)
    interview_ready = Column(Boolean, nullable=True)
    pre_qualified = Column(Boolean, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    work_experiences = relationship("WorkExperience", back_populates="candidate", cascade="all, delete-orphan")
    educations = relationship("Education", back_populates="candidate", cascade="all, delete-orphan")
    certificates = relationship("Certificate", back_populates="candidate", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="candidate", cascade="all, delete-orphan")
    skills = relationship("CandidateSkill", back_populates="candidate", cascade="all, delete-orphan")
    awards = relationship("Award", back_populates="candidate", cascade="all, delete-orphan")
    volunteering = relationship("Volunteering", back_populates="candidate", cascade="all, delete-orphan")
    languages = relationship("Language", back_populates="candidate", cascade="all, delete-orphan")
    accomplishments = relationship("Accomplishment", back_populates="candidate", cascade="all, delete-orphan")


class Skill(Base):
    """Skill catalog shared by every candidate, keyed by normalized name"""
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)  # lowercase, normalized
    display_name = Column(String(100), nullable=False)  # Original casing
    category = Column(SQLEnum(SkillCategory), default=SkillCategory.OTHER)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    candidates = relationship("CandidateSkill", back_populates="skill")


class CandidateSkill(Base):
    """Join row between a candidate and a catalog skill"""
    __tablename__ = "candidate_skills"
    __table_args__ = (
        UniqueConstraint("candidate_id", "skill_id", name="uq_candidate_skill"),
    )

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey('skills.id', ondelete='CASCADE'), nullable=False)

    proficiency = Column(Integer, nullable=True)  # 0-100
    years_of_experience = Column(Float, default=0)
    skill_source = Column(String(50), nullable=True)
    source_title = Column(String(200), nullable=True)
    source_type = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="skills")
    skill = relationship("Skill", back_populates="candidates")


class WorkExperience(Base):
    __tablename__ = "work_experiences"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    company = Column(String(300), nullable=False)
    employment_type = Column(SQLEnum(EmploymentType), nullable=True)
    is_current = Column(Boolean, default=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)  # null while current
    location = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    skill_ids = Column(JSON, default=list)
    media_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="work_experiences")


class Education(Base):
    __tablename__ = "educations"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    degree_diploma = Column(String(200), nullable=False)
    university_school = Column(String(300), nullable=False)
    field_of_study = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    grade = Column(String(100), nullable=True)  # "9.25 (3rd Rank in Class)" etc
    activities_societies = Column(Text, nullable=True)
    skill_ids = Column(JSON, default=list)
    media_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="educations")


class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    name = Column(String(300), nullable=False)
    issuing_authority = Column(String(200), nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)
    credential_id = Column(String(200), nullable=True)
    credential_url = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    skill_ids = Column(JSON, default=list)
    media_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="certificates")


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    name = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False)
    role = Column(String(200), nullable=True)
    responsibilities = Column(JSON, default=list)
    technologies = Column(JSON, default=list)
    tools = Column(JSON, default=list)
    methodologies = Column(JSON, default=list)
    is_confidential = Column(Boolean, default=False)
    can_share_details = Column(Boolean, default=True)
    url = Column(String(500), nullable=True)
    repository_url = Column(String(500), nullable=True)
    media_urls = Column(JSON, default=list)
    skills_gained = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="projects")


class Award(Base):
    __tablename__ = "awards"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    title = Column(String(300), nullable=False)
    offered_by = Column(String(200), nullable=False)
    associated_with = Column(String(200), nullable=True)
    date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    media_url = Column(String(500), nullable=True)
    skill_ids = Column(JSON, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="awards")


class Volunteering(Base):
    __tablename__ = "volunteering"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    role = Column(String(200), nullable=False)
    institution = Column(String(300), nullable=False)
    cause = Column(String(200), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False)
    description = Column(Text, nullable=True)
    media_url = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="volunteering")


class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    language = Column(String(100), nullable=False)
    is_native = Column(Boolean, default=False)
    oral_proficiency = Column(SQLEnum(LanguageProficiency), nullable=True)
    written_proficiency = Column(SQLEnum(LanguageProficiency), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="languages")


class Accomplishment(Base):
    __tablename__ = "accomplishments"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey('candidates.id', ondelete='CASCADE'), nullable=False, index=True)

    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    work_experience_id = Column(Integer, ForeignKey('work_experiences.id', ondelete='SET NULL'), nullable=True)
    resume_id = Column(String(100), nullable=True)  # resume storage lives outside this service

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    candidate = relationship("Candidate", back_populates="accomplishments")
