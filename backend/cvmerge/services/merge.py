"""
CV merge service.

Applies one ExtractedProfileData to a stored candidate profile as a single
unit of work: basic info is filled where empty, each repeating section gets
its new entries, and everything commits together or not at all.
"""
import asyncio
import logging
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import Settings, get_settings
from ..models import Skill, WorkExperience
from ..schemas import (
    SECTION_FIELDS, ExtractedAccomplishment, ExtractedProfileData,
    ExtractedSkill, MergeResult,
)
from .basic_info import resolve_basic_info_fill, with_derived_experience
from .duplicates import Resolution, resolver_for
from .errors import CandidateNotFoundError, MergeError, MergeTimeoutError, MergeTransactionError
from .extraction import parse_extracted_profile
from .normalizer import skill_name_variants
from .records import RECORD_BUILDERS, fit, skill_catalog_name
from .results import MergeResultAggregator
from .store import ProfileStore

logger = logging.getLogger(__name__)


def _catalog_match(name: str, catalog: Dict[str, Skill]) -> Optional[Skill]:
    """Prefer the exact catalog entry, fall back to a synonym's entry."""
    if name in catalog:
        return catalog[name]
    for variant in sorted(skill_name_variants(name)):
        if variant in catalog:
            return catalog[variant]
    return None


class ProfileMergeService:
    """Reconciles extracted CV data with a candidate's stored profile.

    Each call opens its own session from the factory and releases it before
    returning, so the unit of work is exactly one ``merge`` call.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Optional[Settings] = None,
        store_class=ProfileStore,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings or get_settings()
        self._store_class = store_class

    async def merge(
        self,
        candidate_id: int,
        data: Union[ExtractedProfileData, dict, str, bytes],
    ) -> MergeResult:
        """Merge extracted data into the candidate's profile.

        Raises:
            UpstreamExtractionError: the payload is unusable (no store access).
            CandidateNotFoundError: no candidate with this id.
            MergeTimeoutError: the budget ran out; nothing was written.
            MergeTransactionError: the store failed; nothing was written.
        """
        if not isinstance(data, ExtractedProfileData):
            data = parse_extracted_profile(data)

        timeout = self._settings.merge_timeout_seconds
        try:
            return await asyncio.wait_for(self._run(candidate_id, data), timeout=timeout)
        except asyncio.TimeoutError as exc:
            logger.error("CV merge for candidate %s exceeded %ss, rolled back", candidate_id, timeout)
            raise MergeTimeoutError(f"CV merge exceeded {timeout} seconds") from exc

    async def _run(self, candidate_id: int, data: ExtractedProfileData) -> MergeResult:
        async with self._session_factory() as session:
            store = self._store_class(session)
            try:
                async with session.begin():
                    result = await self._apply(store, candidate_id, data)
            except MergeError:
                raise
            except (SQLAlchemyError, OSError) as exc:
                logger.exception("CV merge for candidate %s failed, rolled back", candidate_id)
                raise MergeTransactionError(f"Failed to merge CV data: {exc}") from exc

        logger.info(
            "✅ CV data merged for candidate %s: %d created, basic info updated: %s",
            candidate_id, result.total_created, result.basic_info_updated,
        )
        return result

    async def _apply(self, store: ProfileStore, candidate_id: int, data: ExtractedProfileData) -> MergeResult:
        candidate = await store.get_candidate(candidate_id)
        if candidate is None:
            raise CandidateNotFoundError(candidate_id)

        tally = MergeResultAggregator()

        basic_info = with_derived_experience(data.basic_info, data.work_experiences)
        fill = resolve_basic_info_fill(candidate, basic_info)
        if fill.updated:
            await store.update_candidate(candidate, fill.updates)
            tally.record_basic_info(fill.fields)
            logger.info("Basic info updated for candidate %s: %s", candidate_id, ", ".join(fill.fields))

        for section in SECTION_FIELDS:
            entries = getattr(data, section)
            if not entries:
                continue
            if section == "skills":
                await self._merge_skills(store, candidate_id, entries, tally)
            else:
                if section == "accomplishments":
                    entries = await self._link_accomplishments(store, candidate_id, entries)
                await self._merge_section(store, candidate_id, section, entries, tally)

        return tally.build()

    def _classify(self, resolver, section: str, entry) -> Resolution:
        resolution = resolver.resolve(entry)
        if resolution is Resolution.INVALID:
            logger.warning(
                "Skipping %s entry without %s: %s",
                section, " and ".join(resolver.rule.required), entry.model_dump(exclude_defaults=True),
            )
        elif resolution is Resolution.DUPLICATE:
            logger.info("ℹ️ %s entry already exists, skipping: %s", section, resolver.rule.describe(entry))
        return resolution

    async def _merge_section(self, store: ProfileStore, candidate_id: int, section: str, entries, tally) -> None:
        model, build = RECORD_BUILDERS[section]
        existing = await store.find_existing(model, candidate_id)
        resolver = resolver_for(section, existing)

        for entry in entries:
            resolution = self._classify(resolver, section, entry)
            tally.record(section, resolution)
            if resolution is Resolution.NEW:
                await store.add(build(candidate_id, entry))

    async def _link_accomplishments(
        self, store: ProfileStore, candidate_id: int, entries: List[ExtractedAccomplishment]
    ) -> List[ExtractedAccomplishment]:
        """Drop work experience references that are not this candidate's."""
        if not any(entry.work_experience_id is not None for entry in entries):
            return entries
        owned = {exp.id for exp in await store.find_existing(WorkExperience, candidate_id)}
        linked = []
        for entry in entries:
            if entry.work_experience_id is not None and entry.work_experience_id not in owned:
                logger.info("Accomplishment %r references unknown work experience %s, unlinking",
                            entry.title, entry.work_experience_id)
                entry = entry.model_copy(update={"work_experience_id": None})
            linked.append(entry)
        return linked

    async def _merge_skills(
        self, store: ProfileStore, candidate_id: int, entries: List[ExtractedSkill], tally
    ) -> None:
        existing = await store.find_candidate_skills(candidate_id)
        resolver = resolver_for("skills", existing)

        new_skills: Dict[str, ExtractedSkill] = {}
        for entry in entries:
            resolution = self._classify(resolver, "skills", entry)
            if resolution is Resolution.NEW:
                new_skills[skill_catalog_name(entry.name)] = entry
            else:
                # New skills are counted once their link row is actually inserted
                tally.record("skills", resolution)
        if not new_skills:
            return

        lookup = set()
        for name in new_skills:
            lookup |= skill_name_variants(name)
        catalog = await store.find_catalog_by_normalized_names(lookup)

        missing = [
            {
                "name": name,
                "display_name": fit(Skill, "display_name", entry.name),
                "category": entry.category,
                "description": entry.description,
                "is_active": True,
            }
            for name, entry in new_skills.items()
            if _catalog_match(name, catalog) is None
        ]
        if missing:
            await store.create_catalog_entries_ignoring_conflicts(missing)
            # Re-read so entries another merge inserted first are picked up too
            catalog = await store.find_catalog_by_normalized_names(lookup)

        settings = self._settings
        rows = []
        for name, entry in new_skills.items():
            skill = _catalog_match(name, catalog)
            if skill is None:
                raise MergeTransactionError(f"Skill catalog entry for {name!r} was not created")
            rows.append({
                "candidate_id": candidate_id,
                "skill_id": skill.id,
                "proficiency": entry.proficiency if entry.proficiency is not None else settings.default_skill_proficiency,
                "years_of_experience": 0,
                "skill_source": settings.skill_source,
                "source_title": settings.skill_source_title,
                "source_type": settings.skill_source,
            })
        linked = await store.create_candidate_skills_ignoring_conflicts(rows)
        tally.record("skills", Resolution.NEW, len(linked))
        skipped = len(rows) - len(linked)
        if skipped:
            logger.info("ℹ️ %d skills were already linked to candidate %s, skipping", skipped, candidate_id)
            tally.record("skills", Resolution.DUPLICATE, skipped)
