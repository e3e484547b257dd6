"""Tests for validating extraction service answers."""
from __future__ import annotations

import asyncio
import json
from datetime import date

import pytest

from cvmerge.models import EmploymentType, LanguageProficiency, SkillCategory
from cvmerge.services import (
    UpstreamExtractionError,
    extract_profile,
    normalize_key,
    parse_extracted_profile,
    skill_name_variants,
    strip_json_fence,
)


def test_fenced_json_answer_is_accepted() -> None:
    answer = "```json\n" + json.dumps({"basic_info": {"first_name": "Nimal"}, "skills": [{"name": "Go"}]}) + "\n```"

    data = parse_extracted_profile(answer)

    assert data.basic_info.first_name == "Nimal"
    assert [skill.name for skill in data.skills] == ["Go"]
    assert data.work_experiences == []


def test_strip_json_fence_leaves_plain_json_alone() -> None:
    assert strip_json_fence('  {"a": 1}  ') == '{"a": 1}'


@pytest.mark.parametrize(
    "raw",
    [
        "Sorry, I could not read this CV.",
        "[1, 2, 3]",
        {"work_experiences": "Developer at Beta"},
        {"skills": ["python"]},
        {"basic_info": {"first_name": {"given": "Nimal"}}},
        b"\xff\xfe",
    ],
)
def test_structurally_broken_answers_raise(raw) -> None:
    with pytest.raises(UpstreamExtractionError):
        parse_extracted_profile(raw)


def test_null_sections_become_empty() -> None:
    data = parse_extracted_profile({"basic_info": None, "educations": None, "languages": None})

    assert data.educations == []
    assert data.languages == []
    assert data.basic_info.first_name is None


def test_loose_values_are_coerced() -> None:
    data = parse_extracted_profile(
        {
            "basic_info": {
                "expected_salary_min": "120,000",
                "notice_period": "30",
                "open_to_relocation": "yes",
                "date_of_birth": "1990-04",
                "gender": "Prefer not to say",
                "salary_visibility": "sometimes",
            },
            "work_experiences": [
                {
                    "title": "Developer",
                    "company": "Beta Inc",
                    "employment_type": "Full-Time",
                    "start_date": "2019",
                    "end_date": "Present",
                    "is_current": "true",
                    "skill_ids": None,
                }
            ],
            "skills": [
                {"name": "Go", "category": "Language", "proficiency": 140},
                {"name": "Docker", "category": "containers", "proficiency": "expert"},
            ],
            "languages": [{"language": "English", "oral_proficiency": "Fluent", "written_proficiency": "C2"}],
            "accomplishments": [{"title": "A", "description": "B", "work_experience_id": "abc"}],
        }
    )

    basic = data.basic_info
    assert basic.expected_salary_min == 120000.0
    assert basic.notice_period == 30
    assert basic.open_to_relocation is True
    assert basic.date_of_birth == date(1990, 4, 1)
    assert basic.gender.value == "prefer_not_to_say"
    assert basic.salary_visibility is None

    work = data.work_experiences[0]
    assert work.employment_type is EmploymentType.FULL_TIME
    assert work.start_date == date(2019, 1, 1)
    assert work.end_date is None
    assert work.is_current is True
    assert work.skill_ids == []

    assert data.skills[0].category is SkillCategory.LANGUAGE
    assert data.skills[0].proficiency == 100
    assert data.skills[1].category is SkillCategory.OTHER
    assert data.skills[1].proficiency == 90

    assert data.languages[0].oral_proficiency is LanguageProficiency.FLUENT
    assert data.languages[0].written_proficiency is None
    assert data.accomplishments[0].work_experience_id is None


def test_summary_counts_every_section() -> None:
    data = parse_extracted_profile({"skills": [{"name": "Go"}, {"name": "Rust"}]})

    summary = data.summary()

    assert summary["skills_count"] == 2
    assert summary["work_experiences_count"] == 0
    assert len(summary) == 9


class StubExtractor:
    """Return a canned extraction answer instead of calling an AI service."""

    def __init__(self, answer: str) -> None:
        self.answer = answer
        self.calls = []

    async def extract(self, document: bytes, mime_type: str) -> str:
        self.calls.append((document, mime_type))
        return self.answer


def test_extract_profile_validates_extractor_answer() -> None:
    extractor = StubExtractor('```json\n{"languages": [{"language": "Tamil", "is_native": true}]}\n```')

    data = asyncio.run(extract_profile(extractor, b"%PDF-1.7", "application/pdf"))

    assert extractor.calls == [(b"%PDF-1.7", "application/pdf")]
    assert data.languages[0].is_native is True


def test_normalize_key_trims_and_folds() -> None:
    assert normalize_key("  Acme Corp ") == "acme corp"
    assert normalize_key(None) == ""
    assert normalize_key("   ") == ""
    assert normalize_key(EmploymentType.PART_TIME) == "part_time"


def test_skill_name_variants() -> None:
    assert skill_name_variants(" Node ") == {"node", "nodejs"}
    assert skill_name_variants("SQL Server") == {"sql server", "mssql"}
    assert skill_name_variants("Haskell") == {"haskell"}
    assert skill_name_variants("") == set()
