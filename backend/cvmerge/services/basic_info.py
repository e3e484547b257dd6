"""
Selective fill of the candidate's scalar profile fields.

Every updatable field is declared once in BASIC_INFO_FIELDS. An extracted
value is written only when the stored value is empty; a populated field is
never overwritten, whatever the CV says.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..models import Candidate
from ..schemas import ExtractedBasicInfo, ExtractedWorkExperience
from .records import fit


def _is_none(value: Any) -> bool:
    return value is None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class BasicInfoField:
    name: str
    is_empty: Callable[[Any], bool] = _is_none


def _text(name: str) -> BasicInfoField:
    return BasicInfoField(name, _is_blank)


def _value(name: str) -> BasicInfoField:
    # False and 0 are real answers, only None counts as unset
    return BasicInfoField(name, _is_none)


BASIC_INFO_FIELDS = (
    _text("first_name"),
    _text("last_name"),
    _text("title"),
    _text("current_position"),
    _text("industry"),
    _text("bio"),
    _text("about"),
    _text("country"),
    _text("city"),
    _text("location"),
    _text("address"),
    _text("phone1"),
    _text("phone2"),
    _text("personal_website"),
    _text("github_url"),
    _text("linkedin_url"),
    _text("portfolio_url"),
    _value("years_of_experience"),
    _value("gender"),
    _value("date_of_birth"),
    _text("nic"),
    _text("passport"),
    _value("remote_preference"),
    _value("experience_level"),
    _value("expected_salary_min"),
    _value("expected_salary_max"),
    _text("currency"),
    _value("availability_status"),
    _value("availability_date"),
    _text("professional_summary"),
    _value("total_years_experience"),
    _value("open_to_relocation"),
    _value("willing_to_travel"),
    _value("security_clearance"),
    _text("disability_status"),
    _text("veteran_status"),
    _text("pronouns"),
    _value("salary_visibility"),
    _value("notice_period"),
    _text("work_authorization"),
    _value("visa_assistance_needed"),
    _value("work_availability"),
    _value("interview_ready"),
    _value("pre_qualified"),
)


@dataclass
class BasicInfoFill:
    updates: Dict[str, Any] = field(default_factory=dict)

    @property
    def fields(self) -> List[str]:
        return list(self.updates)

    @property
    def updated(self) -> bool:
        return bool(self.updates)


def resolve_basic_info_fill(candidate: Candidate, incoming: ExtractedBasicInfo) -> BasicInfoFill:
    """Work out which stored fields may take the extracted value."""
    fill = BasicInfoFill()
    for descriptor in BASIC_INFO_FIELDS:
        value = getattr(incoming, descriptor.name)
        if descriptor.is_empty(value):
            continue
        if not descriptor.is_empty(getattr(candidate, descriptor.name)):
            continue
        fill.updates[descriptor.name] = fit(Candidate, descriptor.name, value)
    return fill


def _months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def calculate_years_of_experience(
    work_experiences: Iterable[ExtractedWorkExperience],
    today: Optional[date] = None,
) -> int:
    """Sum the months of every dated role and round to whole years."""
    today = today or date.today()
    total_months = 0
    for exp in work_experiences:
        if exp.start_date is None:
            continue
        end = exp.end_date or today
        total_months += max(0, _months_between(exp.start_date, end))
    return int(total_months / 12 + 0.5)


def with_derived_experience(
    basic_info: ExtractedBasicInfo,
    work_experiences: List[ExtractedWorkExperience],
    today: Optional[date] = None,
) -> ExtractedBasicInfo:
    """Fill missing experience totals from the work history."""
    if basic_info.years_of_experience is not None and basic_info.total_years_experience is not None:
        return basic_info
    if not any(exp.start_date for exp in work_experiences):
        return basic_info

    years = float(calculate_years_of_experience(work_experiences, today))
    derived = {}
    if basic_info.years_of_experience is None:
        derived["years_of_experience"] = years
    if basic_info.total_years_experience is None:
        derived["total_years_experience"] = years
    return basic_info.model_copy(update=derived)
