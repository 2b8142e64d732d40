"""
person data access.

``PersonRepository`` is the async interface the handlers depend on;
``SqlPersonRepository`` is the production implementation over a SQLModel
``AsyncSession``. writes (add/update/delete) are staged on the session and only
become durable when the owning unit of work commits.

every method is a coroutine: cancelling the request task raises
``asyncio.CancelledError`` at the pending database await and it propagates
to the caller untouched. storage failures surface as sqlalchemy errors.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from people_api.models import Person


class PersonRepository(ABC):

    @abstractmethod
    async def get_by_id(self, person_id: UUID) -> Optional[Person]: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Person]: ...

    @abstractmethod
    async def get_by_document(self, document: str) -> Optional[Person]: ...

    @abstractmethod
    async def get_all(self) -> Sequence[Person]: ...

    @abstractmethod
    async def get_active(self) -> Sequence[Person]: ...

    @abstractmethod
    async def count(self) -> int: ...

    @abstractmethod
    async def add(self, person: Person) -> Person: ...

    @abstractmethod
    async def update(self, person: Person) -> None: ...

    @abstractmethod
    async def delete(self, person_id: UUID) -> None:
        """stage removal; a missing id is a no-op"""

    @abstractmethod
    async def exists(self, person_id: UUID) -> bool: ...

    @abstractmethod
    async def email_exists(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        """true if any person other than ``exclude_id`` owns this email"""

    @abstractmethod
    async def document_exists(self, document: str, exclude_id: Optional[UUID] = None) -> bool:
        """true if any person other than ``exclude_id`` owns this document"""


class SqlPersonRepository(PersonRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, person_id: UUID) -> Optional[Person]:
        return await self.session.get(Person, person_id)

    async def get_by_email(self, email: str) -> Optional[Person]:
        result = await self.session.exec(select(Person).where(Person.email == email))
        return result.first()

    async def get_by_document(self, document: str) -> Optional[Person]:
        result = await self.session.exec(select(Person).where(Person.document == document))
        return result.first()

    async def get_all(self) -> Sequence[Person]:
        result = await self.session.exec(select(Person))
        return result.all()

    async def get_active(self) -> Sequence[Person]:
        result = await self.session.exec(select(Person).where(Person.active == True))  # noqa: E712
        return result.all()

    async def count(self) -> int:
        result = await self.session.exec(select(func.count()).select_from(Person))
        return result.one()

    async def add(self, person: Person) -> Person:
        self.session.add(person)
        return person

    async def update(self, person: Person) -> None:
        self.session.add(person)

    async def delete(self, person_id: UUID) -> None:
        person = await self.get_by_id(person_id)
        if person is not None:
            await self.session.delete(person)

    async def exists(self, person_id: UUID) -> bool:
        result = await self.session.exec(select(Person.id).where(Person.id == person_id).limit(1))
        return result.first() is not None

    async def email_exists(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(Person.id).where(Person.email == email)
        if exclude_id is not None:
            query = query.where(Person.id != exclude_id)
        result = await self.session.exec(query.limit(1))
        return result.first() is not None

    async def document_exists(self, document: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(Person.id).where(Person.document == document)
        if exclude_id is not None:
            query = query.where(Person.id != exclude_id)
        result = await self.session.exec(query.limit(1))
        return result.first() is not None
