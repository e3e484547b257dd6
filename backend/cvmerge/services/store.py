"""Persistence operations used by the merge service."""
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Candidate, CandidateSkill, Skill
from .errors import MergeTransactionError

_INSERT_BY_DIALECT = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class ProfileStore:
    """Find/create access to one candidate's profile inside a session.

    The store never commits; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _insert(self, model):
        dialect = self._session.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect](model)
        except KeyError:
            raise MergeTransactionError(f"Conflict-tolerant insert is not supported on {dialect}") from None

    async def get_candidate(self, candidate_id: int) -> Optional[Candidate]:
        result = await self._session.execute(select(Candidate).where(Candidate.id == candidate_id))
        return result.scalar_one_or_none()

    async def update_candidate(self, candidate: Candidate, updates: Dict[str, object]) -> None:
        for name, value in updates.items():
            setattr(candidate, name, value)
        await self._session.flush()

    async def find_existing(self, model, candidate_id: int) -> Sequence:
        """All rows of one section belonging to the candidate."""
        result = await self._session.execute(
            select(model).where(model.candidate_id == candidate_id).order_by(model.id)
        )
        return result.scalars().all()

    async def find_candidate_skills(self, candidate_id: int) -> Sequence[Skill]:
        """Catalog entries the candidate is already linked to."""
        result = await self._session.execute(
            select(Skill)
            .join(CandidateSkill, CandidateSkill.skill_id == Skill.id)
            .where(CandidateSkill.candidate_id == candidate_id)
        )
        return result.scalars().all()

    async def add(self, record) -> None:
        self._session.add(record)
        await self._session.flush()

    async def find_catalog_by_normalized_names(self, names: Iterable[str]) -> Dict[str, Skill]:
        names = sorted(set(names))
        if not names:
            return {}
        result = await self._session.execute(select(Skill).where(Skill.name.in_(names)))
        return {skill.name: skill for skill in result.scalars().all()}

    async def create_catalog_entries_ignoring_conflicts(self, entries: List[dict]) -> None:
        """Insert catalog rows; names another writer added first are left alone."""
        if not entries:
            return
        statement = self._insert(Skill).values(entries).on_conflict_do_nothing(index_elements=["name"])
        await self._session.execute(statement)

    async def create_candidate_skills_ignoring_conflicts(self, rows: List[dict]) -> List[int]:
        """Link skills to the candidate, returning the skill ids actually linked."""
        if not rows:
            return []
        statement = (
            self._insert(CandidateSkill)
            .values(rows)
            .on_conflict_do_nothing(index_elements=["candidate_id", "skill_id"])
            .returning(CandidateSkill.skill_id)
        )
        result = await self._session.execute(statement)
        return list(result.scalars().all())
