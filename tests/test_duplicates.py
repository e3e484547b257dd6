"""Tests for per-section duplicate detection rules."""
from __future__ import annotations

import pytest

from cvmerge.models import EmploymentType, Skill, WorkExperience
from cvmerge.schemas import (
    ExtractedAccomplishment,
    ExtractedAward,
    ExtractedCertificate,
    ExtractedEducation,
    ExtractedLanguage,
    ExtractedProject,
    ExtractedSkill,
    ExtractedVolunteering,
    ExtractedWorkExperience,
)
from cvmerge.services import SKILL_SYNONYMS, Resolution, resolver_for


def test_work_experience_matches_stored_row_ignoring_case() -> None:
    stored = WorkExperience(title="Senior Engineer", company="Acme Corp", employment_type=EmploymentType.FULL_TIME)
    resolver = resolver_for("work_experiences", [stored])

    incoming = ExtractedWorkExperience(title="senior engineer ", company=" ACME CORP", employment_type="Full Time")

    assert resolver.resolve(incoming) is Resolution.DUPLICATE


def test_work_experience_same_company_and_type_is_duplicate() -> None:
    resolver = resolver_for(
        "work_experiences",
        [ExtractedWorkExperience(title="Engineer", company="Acme", employment_type="contract")],
    )

    promoted = ExtractedWorkExperience(title="Lead Engineer", company="Acme", employment_type="contract")
    other_type = ExtractedWorkExperience(title="Lead Engineer", company="Acme", employment_type="full_time")

    assert resolver.resolve(promoted) is Resolution.DUPLICATE
    assert resolver.resolve(other_type) is Resolution.NEW


def test_work_experience_without_type_still_matches_on_title_and_company() -> None:
    resolver = resolver_for("work_experiences", [ExtractedWorkExperience(title="Engineer", company="Acme")])

    assert resolver.resolve(
        ExtractedWorkExperience(title="Engineer", company="Acme", employment_type="freelance")
    ) is Resolution.DUPLICATE


@pytest.mark.parametrize(
    "incoming, expected",
    [
        ({"degree_diploma": "MSc", "university_school": "Moratuwa"}, Resolution.DUPLICATE),
        ({"degree_diploma": "BSc", "university_school": "Colombo", "field_of_study": "Physics"}, Resolution.DUPLICATE),
        ({"degree_diploma": "BSc", "university_school": "Colombo", "field_of_study": "Maths"}, Resolution.NEW),
        ({"degree_diploma": "BSc", "university_school": "Colombo"}, Resolution.NEW),
    ],
)
def test_education_rules(incoming, expected) -> None:
    stored = ExtractedEducation(degree_diploma="BSc", university_school="Moratuwa", field_of_study="Physics")
    resolver = resolver_for("educations", [stored])

    assert resolver.resolve(ExtractedEducation(**incoming)) is expected


def test_certificate_matches_on_name_or_credential_id() -> None:
    stored = ExtractedCertificate(name="CKA", issuing_authority="CNCF", credential_id="LF-42")
    resolver = resolver_for("certificates", [stored])

    assert resolver.resolve(ExtractedCertificate(name="cka", issuing_authority="Linux Foundation")) is Resolution.DUPLICATE
    assert resolver.resolve(ExtractedCertificate(name="Kubernetes Admin", credential_id=" lf-42")) is Resolution.DUPLICATE
    assert resolver.resolve(ExtractedCertificate(name="CKAD")) is Resolution.NEW


def test_project_matches_on_name() -> None:
    resolver = resolver_for("projects", [ExtractedProject(name="Ledger", role="Lead", technologies=["Python"])])

    assert resolver.resolve(ExtractedProject(name="LEDGER", technologies=["Go"])) is Resolution.DUPLICATE
    assert resolver.resolve(ExtractedProject(name="Wallet", role="Lead", technologies=["Python"])) is Resolution.NEW


@pytest.mark.parametrize(
    "section, stored, incoming",
    [
        ("work_experiences", ExtractedWorkExperience(title="Dev", company="Beta"),
         ExtractedWorkExperience(title=" DEV", company="beta ")),
        ("educations", ExtractedEducation(degree_diploma="BSc", university_school="Moratuwa"),
         ExtractedEducation(degree_diploma="bsc", university_school=" MORATUWA")),
        ("certificates", ExtractedCertificate(name="CKA", issuing_authority="CNCF"),
         ExtractedCertificate(name=" cka ", issuing_authority="cncf")),
        ("projects", ExtractedProject(name="Ledger"), ExtractedProject(name="ledger  ")),
        ("skills", ExtractedSkill(name="Python"), ExtractedSkill(name="  PYTHON")),
        ("awards", ExtractedAward(title="Best Paper", offered_by="IEEE"),
         ExtractedAward(title="BEST PAPER", offered_by=" ieee")),
        ("volunteering", ExtractedVolunteering(role="Mentor", institution="Code Club"),
         ExtractedVolunteering(role="mentor", institution="CODE CLUB ")),
        ("languages", ExtractedLanguage(language="English"), ExtractedLanguage(language="english")),
        ("accomplishments", ExtractedAccomplishment(title="Cut latency", description="By 40%"),
         ExtractedAccomplishment(title="CUT LATENCY", description=" by 40% ")),
    ],
)
def test_case_and_whitespace_do_not_matter(section, stored, incoming) -> None:
    resolver = resolver_for(section, [stored])

    assert resolver.resolve(incoming) is Resolution.DUPLICATE


@pytest.mark.parametrize(
    "section, incoming",
    [
        ("work_experiences", ExtractedWorkExperience(title="Dev")),
        ("educations", ExtractedEducation(university_school="Moratuwa")),
        ("certificates", ExtractedCertificate(issuing_authority="CNCF")),
        ("projects", ExtractedProject(description="No name")),
        ("skills", ExtractedSkill(name="   ")),
        ("awards", ExtractedAward(title="Best Paper")),
        ("volunteering", ExtractedVolunteering(role="Mentor")),
        ("languages", ExtractedLanguage()),
        ("accomplishments", ExtractedAccomplishment(title="Cut latency")),
    ],
)
def test_entries_missing_identifying_fields_are_invalid(section, incoming) -> None:
    resolver = resolver_for(section)

    assert resolver.resolve(incoming) is Resolution.INVALID


def test_new_entries_register_their_keys() -> None:
    resolver = resolver_for("awards")
    award = ExtractedAward(title="Best Paper", offered_by="IEEE")

    assert resolver.resolve(award) is Resolution.NEW
    assert resolver.resolve(award.model_copy()) is Resolution.DUPLICATE


def test_key_components_do_not_collide_across_fields() -> None:
    resolver = resolver_for("awards", [ExtractedAward(title="a|b", offered_by="c")])

    assert resolver.resolve(ExtractedAward(title="a", offered_by="b|c")) is Resolution.NEW


@pytest.mark.parametrize("left, right", SKILL_SYNONYMS)
def test_skill_synonyms_match_both_ways(left, right) -> None:
    forward = resolver_for("skills", [Skill(name=left, display_name=left)])
    backward = resolver_for("skills", [Skill(name=right, display_name=right)])

    assert forward.resolve(ExtractedSkill(name=right.upper())) is Resolution.DUPLICATE
    assert backward.resolve(ExtractedSkill(name=left.title())) is Resolution.DUPLICATE


def test_unrelated_skills_do_not_match() -> None:
    resolver = resolver_for("skills", [Skill(name="java", display_name="Java")])

    assert resolver.resolve(ExtractedSkill(name="JavaScript")) is Resolution.NEW
