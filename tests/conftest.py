"""Shared fixtures for merge engine tests."""
from __future__ import annotations

from typing import Any, List, Optional

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from cvmerge.config import Settings
from cvmerge.database import init_db
from cvmerge.models import Candidate, CandidateSkill, Skill
from cvmerge.services import ProfileMergeService, ProfileStore


class ProfileDatabase:
    """Temporary SQLite profile database driven from inside ``asyncio.run``."""

    def __init__(self, url: str) -> None:
        self.url = url
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    async def __aenter__(self) -> "ProfileDatabase":
        self.engine = create_async_engine(self.url)
        await init_db(self.engine)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.engine.dispose()

    def settings(self, **overrides: Any) -> Settings:
        return Settings(database_url=self.url, **overrides)

    def service(self, store_class=ProfileStore, **overrides: Any) -> ProfileMergeService:
        return ProfileMergeService(self.session_factory, self.settings(**overrides), store_class=store_class)

    async def add_candidate(self, **fields: Any) -> int:
        async with self.session_factory() as session:
            candidate = Candidate(**fields)
            session.add(candidate)
            await session.commit()
            return candidate.id

    async def add(self, *rows: Any) -> None:
        async with self.session_factory() as session:
            session.add_all(rows)
            await session.commit()

    async def add_skill(self, candidate_id: Optional[int], name: str) -> Skill:
        """Create a catalog entry, linking it to the candidate when one is given."""
        async with self.session_factory() as session:
            skill = Skill(name=name.strip().lower(), display_name=name)
            session.add(skill)
            await session.flush()
            if candidate_id is not None:
                session.add(CandidateSkill(candidate_id=candidate_id, skill_id=skill.id, proficiency=70))
            await session.commit()
            return skill

    async def rows(self, model, candidate_id: int) -> List[Any]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(model).where(model.candidate_id == candidate_id).order_by(model.id)
            )
            return list(result.scalars().all())

    async def all_rows(self, model) -> List[Any]:
        async with self.session_factory() as session:
            result = await session.execute(select(model).order_by(model.id))
            return list(result.scalars().all())

    async def candidate(self, candidate_id: int) -> Candidate:
        async with self.session_factory() as session:
            return await session.get(Candidate, candidate_id)

    async def skill_names(self, candidate_id: int) -> List[str]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Skill.name)
                .join(CandidateSkill, CandidateSkill.skill_id == Skill.id)
                .where(CandidateSkill.candidate_id == candidate_id)
                .order_by(Skill.name)
            )
            return list(result.scalars().all())


@pytest.fixture
def profile_db(tmp_path) -> ProfileDatabase:
    return ProfileDatabase(f"sqlite+aiosqlite:///{tmp_path / 'profiles.db'}")


@pytest.fixture
def full_payload() -> dict:
    """A realistic extraction answer touching every section."""
    return {
        "basic_info": {
            "first_name": "Nimal",
            "last_name": "Perera",
            "title": "Backend Engineer",
            "city": "Colombo",
            "country": "Sri Lanka",
            "bio": "Builds APIs.",
            "linkedin_url": "https://linkedin.com/in/nperera",
            "remote_preference": "hybrid",
            "open_to_relocation": False,
        },
        "work_experiences": [
            {
                "title": "Senior Engineer",
                "company": "Acme Corp",
                "employment_type": "full_time",
                "is_current": True,
                "start_date": "2021-01-01",
                "end_date": None,
                "description": "Payments platform",
            },
            {
                "title": "Developer",
                "company": "Beta Inc",
                "employment_type": "contract",
                "is_current": False,
                "start_date": "2018-06-01",
                "end_date": "2020-12-31",
            },
        ],
        "educations": [
            {
                "degree_diploma": "BSc",
                "university_school": "University of Moratuwa",
                "field_of_study": "Computer Science",
                "start_date": "2014-01-01",
                "end_date": "2018-01-01",
            }
        ],
        "certificates": [
            {"name": "AWS Solutions Architect", "issuing_authority": "Amazon", "credential_id": "AWS-123"}
        ],
        "projects": [
            {"name": "Ledger", "description": "Double-entry ledger", "role": "Lead", "technologies": ["Python", "Postgres"]}
        ],
        "skills": [
            {"name": "Python", "category": "language", "proficiency": 90},
            {"name": "PostgreSQL", "category": "database"},
        ],
        "awards": [
            {"title": "Employee of the Year", "offered_by": "Acme Corp", "date": "2022-12-01"}
        ],
        "volunteering": [
            {"role": "Mentor", "institution": "Code Club", "start_date": "2019-01-01", "is_current": True}
        ],
        "languages": [
            {"language": "English", "is_native": False, "oral_proficiency": "fluent"},
            {"language": "Sinhala", "is_native": True, "oral_proficiency": "native"},
        ],
        "accomplishments": [
            {"title": "Cut latency", "description": "Reduced p99 latency by 40%"}
        ],
    }
