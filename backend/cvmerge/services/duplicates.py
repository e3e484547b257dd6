"""
Duplicate detection for the repeating profile sections.

Each section has a MatchRule: the fields an entry must carry to be usable, and
the composite keys that identify it. Stored rows and extracted entries share
attribute names, so one rule serves both sides. A DuplicateResolver is seeded
with the keys of the stored rows and then fed extracted entries in order; new
entries register their keys straight away so a repeat later in the same batch
is caught too.
"""
import enum
from typing import Any, Dict, Generic, Hashable, Iterable, Optional, Set, Tuple, TypeVar

from ..models import (
    WorkExperience, Education, Certificate, Project, Skill, Award,
    Volunteering, Language, Accomplishment,
)
from .normalizer import normalize_key, skill_name_variants
from .records import fit, skill_catalog_name

T = TypeVar("T")


class Resolution(str, enum.Enum):
    NEW = "new"
    DUPLICATE = "duplicate"
    INVALID = "invalid"


class MatchRule:
    """Required fields plus composite keys for one section.

    A composite key is only produced when every one of its components is
    non-empty, so optional fields simply drop the keys they take part in.
    """

    def __init__(
        self,
        section: str,
        model,
        required: Tuple[str, ...],
        composites: Tuple[Tuple[str, ...], ...],
    ):
        self.section = section
        self.model = model
        self.required = required
        self.composites = composites

    def _component(self, record: Any, field: str) -> str:
        value = getattr(record, field, None)
        # List fields (e.g. project technologies) match on their first element
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        # Key on the value as stored, truncated to the column
        return normalize_key(fit(self.model, field, value))

    def is_valid(self, record: Any) -> bool:
        return all(self._component(record, field) for field in self.required)

    def keys(self, record: Any) -> Set[Hashable]:
        keys: Set[Hashable] = set()
        for fields in self.composites:
            values = tuple(self._component(record, field) for field in fields)
            if all(values):
                keys.add((fields, values))
        return keys

    def describe(self, record: Any) -> str:
        """Short human label for log lines"""
        return " / ".join(str(getattr(record, field, None)) for field in self.required)

    def __repr__(self):
        return f"MatchRule({self.section!r})"


class SkillMatchRule(MatchRule):
    """Skills match on the normalized name or any synonym of it."""

    def __init__(self):
        super().__init__("skills", Skill, ("name",), (("name",),))

    def keys(self, record: Any) -> Set[Hashable]:
        name = skill_catalog_name(getattr(record, "name", None))
        return {(("name",), (variant,)) for variant in skill_name_variants(name)}


MATCH_RULES: Dict[str, MatchRule] = {
    "work_experiences": MatchRule(
        "work_experiences",
        WorkExperience,
        required=("title", "company"),
        composites=(
            ("title", "company", "employment_type"),
            ("title", "company"),
            ("company", "employment_type"),
        ),
    ),
    "educations": MatchRule(
        "educations",
        Education,
        required=("degree_diploma", "university_school"),
        composites=(
            ("degree_diploma", "university_school"),
            ("university_school",),
            ("degree_diploma", "field_of_study"),
        ),
    ),
    "certificates": MatchRule(
        "certificates",
        Certificate,
        required=("name",),
        composites=(
            ("name", "issuing_authority"),
            ("name",),
            ("credential_id",),
        ),
    ),
    "projects": MatchRule(
        "projects",
        Project,
        required=("name",),
        composites=(
            ("name",),
            ("name", "role"),
            ("name", "technologies"),
        ),
    ),
    "skills": SkillMatchRule(),
    "awards": MatchRule(
        "awards",
        Award,
        required=("title", "offered_by"),
        composites=(("title", "offered_by"),),
    ),
    "volunteering": MatchRule(
        "volunteering",
        Volunteering,
        required=("role", "institution"),
        composites=(("role", "institution"),),
    ),
    "languages": MatchRule(
        "languages",
        Language,
        required=("language",),
        composites=(("language",),),
    ),
    "accomplishments": MatchRule(
        "accomplishments",
        Accomplishment,
        required=("title", "description"),
        composites=(("title", "description"),),
    ),
}


class DuplicateResolver(Generic[T]):
    """In-memory key set for one section of one candidate."""

    def __init__(self, rule: MatchRule, existing: Optional[Iterable[Any]] = None):
        self.rule = rule
        self._keys: Set[Hashable] = set()
        for record in existing or ():
            self._keys.update(rule.keys(record))

    def resolve(self, record: T) -> Resolution:
        """Classify an incoming entry, registering its keys when it is new."""
        if not self.rule.is_valid(record):
            return Resolution.INVALID
        keys = self.rule.keys(record)
        if not self._keys.isdisjoint(keys):
            return Resolution.DUPLICATE
        self._keys.update(keys)
        return Resolution.NEW


def resolver_for(section: str, existing: Optional[Iterable[Any]] = None) -> DuplicateResolver:
    return DuplicateResolver(MATCH_RULES[section], existing)
