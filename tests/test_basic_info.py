"""Tests for the selective fill of scalar profile fields."""
from __future__ import annotations

from datetime import date

from cvmerge.models import Candidate, ExperienceLevel, RemotePreference
from cvmerge.schemas import ExtractedBasicInfo, ExtractedWorkExperience
from cvmerge.services import (
    BASIC_INFO_FIELDS,
    calculate_years_of_experience,
    resolve_basic_info_fill,
    with_derived_experience,
)


def test_every_declared_field_exists_on_both_sides() -> None:
    names = [descriptor.name for descriptor in BASIC_INFO_FIELDS]

    assert len(names) == len(set(names))
    assert set(names) == set(ExtractedBasicInfo.model_fields)
    for name in names:
        assert name in Candidate.__table__.c


def test_only_empty_fields_are_filled() -> None:
    candidate = Candidate(first_name="Nimal", last_name="", bio="   ", experience_level=ExperienceLevel.SENIOR)
    incoming = ExtractedBasicInfo(
        first_name="Kamal",
        last_name="Perera",
        bio="Builds APIs.",
        experience_level="junior",
        remote_preference="remote-only",
    )

    fill = resolve_basic_info_fill(candidate, incoming)

    assert fill.updated is True
    assert fill.updates == {
        "last_name": "Perera",
        "bio": "Builds APIs.",
        "remote_preference": RemotePreference.REMOTE_ONLY,
    }


def test_false_and_zero_count_as_populated() -> None:
    candidate = Candidate(willing_to_travel=False, notice_period=0)
    incoming = ExtractedBasicInfo(willing_to_travel=True, notice_period=30)

    fill = resolve_basic_info_fill(candidate, incoming)

    assert fill.updated is False
    assert fill.fields == []


def test_incoming_blanks_are_ignored() -> None:
    candidate = Candidate()
    incoming = ExtractedBasicInfo(city="  ", country="null", gender="unknown")

    assert resolve_basic_info_fill(candidate, incoming).updated is False


def test_filled_strings_are_truncated_to_column_length() -> None:
    fill = resolve_basic_info_fill(Candidate(), ExtractedBasicInfo(currency="SRI LANKAN RUPEES"))

    assert fill.updates["currency"] == "SRI LANKAN"


def test_years_of_experience_from_work_history() -> None:
    history = [
        ExtractedWorkExperience(title="A", company="X", start_date="2018-01-01", end_date="2020-07-01"),
        ExtractedWorkExperience(title="B", company="Y", start_date="2020-07-01", is_current=True),
        ExtractedWorkExperience(title="C", company="Z"),
    ]

    assert calculate_years_of_experience(history, today=date(2024, 1, 1)) == 6


def test_derived_experience_keeps_stated_values() -> None:
    history = [ExtractedWorkExperience(title="A", company="X", start_date="2020-01-01", end_date="2022-01-01")]
    stated = ExtractedBasicInfo(years_of_experience=7)

    derived = with_derived_experience(stated, history)

    assert derived.years_of_experience == 7
    assert derived.total_years_experience == 2


def test_no_dated_history_means_no_derivation() -> None:
    basic = ExtractedBasicInfo()

    assert with_derived_experience(basic, [ExtractedWorkExperience(title="A", company="X")]) is basic
