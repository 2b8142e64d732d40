import os

# point the app at sqlite before anything imports the engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DB_CONNECT_RETRIES", "1")

from datetime import date
from typing import Dict, List, Optional, Sequence
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from people_api.core.db import get_session
from people_api.main import app
from people_api.models import Person
from people_api.services.repository import PersonRepository
from people_api.services.unit_of_work import UnitOfWork


# create in-memory test database
@pytest_asyncio.fixture(name="engine")
async def engine_fixture():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(engine):
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession):
    async def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


class InMemoryPersonRepository(PersonRepository):
    """dict-backed repository; writes are staged until the unit of work commits"""

    def __init__(self):
        self.rows: Dict[UUID, Person] = {}
        self.staged: Dict[UUID, Person] = {}
        self.deleted: List[UUID] = []

    async def get_by_id(self, person_id: UUID) -> Optional[Person]:
        return self.rows.get(person_id)

    async def get_by_email(self, email: str) -> Optional[Person]:
        return next((p for p in self.rows.values() if p.email == email), None)

    async def get_by_document(self, document: str) -> Optional[Person]:
        return next((p for p in self.rows.values() if p.document == document), None)

    async def get_all(self) -> Sequence[Person]:
        return list(self.rows.values())

    async def get_active(self) -> Sequence[Person]:
        return [p for p in self.rows.values() if p.active]

    async def count(self) -> int:
        return len(self.rows)

    async def add(self, person: Person) -> Person:
        self.staged[person.id] = person
        return person

    async def update(self, person: Person) -> None:
        self.staged[person.id] = person

    async def delete(self, person_id: UUID) -> None:
        if person_id in self.rows:
            self.deleted.append(person_id)

    async def exists(self, person_id: UUID) -> bool:
        return person_id in self.rows

    async def email_exists(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        return any(p.email == email and p.id != exclude_id for p in self.rows.values())

    async def document_exists(self, document: str, exclude_id: Optional[UUID] = None) -> bool:
        return any(p.document == document and p.id != exclude_id for p in self.rows.values())


class InMemoryUnitOfWork(UnitOfWork):
    """
    applies staged writes on commit and enforces the email/document unique
    indexes the way the database would. ``concurrent_writes`` are persons
    inserted by "another request" right before the next commit lands.
    """

    def __init__(self):
        self.people = InMemoryPersonRepository()
        self.commits = 0
        self.rollbacks = 0
        self.concurrent_writes: List[Person] = []

    async def commit(self) -> None:
        for person in self.concurrent_writes:
            self.people.rows[person.id] = person
        self.concurrent_writes = []

        for person in self.people.staged.values():
            for other in self.people.rows.values():
                if other.id == person.id:
                    continue
                if other.email == person.email or other.document == person.document:
                    await self.rollback()
                    raise IntegrityError("INSERT INTO people", {}, Exception("UNIQUE constraint failed"))

        self.people.rows.update(self.people.staged)
        for person_id in self.people.deleted:
            self.people.rows.pop(person_id, None)
        self.people.staged = {}
        self.people.deleted = []
        self.commits += 1

    async def begin(self) -> None:
        pass

    async def commit_transaction(self) -> None:
        await self.commit()

    async def rollback(self) -> None:
        self.people.staged = {}
        self.people.deleted = []
        self.rollbacks += 1


@pytest.fixture(name="uow")
def uow_fixture():
    return InMemoryUnitOfWork()


def make_person(
    first_name: str = "Maria",
    last_name: str = "Souza",
    email: str = "maria@example.com",
    birth_date: date = date(1985, 3, 20),
    document: str = "12345678900",
) -> Person:
    return Person.create(first_name, last_name, email, birth_date, document)


@pytest.fixture(name="person_factory")
def person_factory_fixture():
    return make_person
