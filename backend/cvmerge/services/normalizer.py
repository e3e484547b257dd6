"""
Key normalization shared by every duplicate check.
"""
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Set

# Abbreviation pairs, applied to skill names only. Each pair works both ways.
SKILL_SYNONYMS = (
    ("javascript", "js"),
    ("typescript", "ts"),
    ("reactjs", "react"),
    ("nodejs", "node"),
    ("expressjs", "express"),
    ("mongodb", "mongo"),
    ("postgresql", "postgres"),
    ("sql server", "mssql"),
)


def _build_synonym_index(pairs) -> Dict[str, FrozenSet[str]]:
    index: Dict[str, Set[str]] = {}
    for left, right in pairs:
        index.setdefault(left, set()).add(right)
        index.setdefault(right, set()).add(left)
    return {name: frozenset(others) for name, others in index.items()}


_SYNONYM_INDEX = _build_synonym_index(SKILL_SYNONYMS)


def normalize_key(value: Any) -> str:
    """Trim and case-fold a matching field. Missing values become ''."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower()


def normalize_skill_name(skill_name: Optional[str]) -> str:
    """Normalize skill name for consistent storage and matching."""
    return normalize_key(skill_name)


def skill_name_variants(skill_name: Optional[str]) -> Set[str]:
    """The normalized name plus every known synonym of it."""
    normalized = normalize_skill_name(skill_name)
    if not normalized:
        return set()
    return {normalized} | _SYNONYM_INDEX.get(normalized, frozenset())
