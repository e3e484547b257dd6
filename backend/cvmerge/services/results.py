"""Tally of what a merge created and skipped."""
from collections import Counter
from typing import List

from ..schemas import SECTION_FIELDS, MergeResult, SectionCounts
from .duplicates import Resolution


class MergeResultAggregator:
    def __init__(self) -> None:
        self._counts = {resolution: Counter() for resolution in Resolution}
        self._basic_info_fields: List[str] = []

    def record(self, section: str, resolution: Resolution, count: int = 1) -> None:
        if section not in SECTION_FIELDS:
            raise KeyError(f"Unknown profile section: {section}")
        self._counts[resolution][section] += count

    def record_basic_info(self, fields: List[str]) -> None:
        self._basic_info_fields.extend(fields)

    def build(self) -> MergeResult:
        created = self._counts[Resolution.NEW]
        return MergeResult(
            basic_info_updated=bool(self._basic_info_fields),
            basic_info_fields=list(self._basic_info_fields),
            **{f"new_{section}": created[section] for section in SECTION_FIELDS},
            skipped_duplicates=SectionCounts(**self._counts[Resolution.DUPLICATE]),
            skipped_invalid=SectionCounts(**self._counts[Resolution.INVALID]),
        )
