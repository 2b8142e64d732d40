from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSessionTransaction
from sqlmodel.ext.asyncio.session import AsyncSession

from people_api.core.logging_config import get_logger
from people_api.services.repository import PersonRepository, SqlPersonRepository

logger = get_logger(__name__)


class UnitOfWork(ABC):
    """groups repository writes into one persistence commit"""

    people: PersonRepository

    @abstractmethod
    async def commit(self) -> None:
        """flush and persist every staged write"""

    @abstractmethod
    async def begin(self) -> None:
        """open an explicit transaction for multi-step use cases"""

    @abstractmethod
    async def commit_transaction(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session: AsyncSession):
        self.session = session
        self.people = SqlPersonRepository(session)
        self._transaction: Optional[AsyncSessionTransaction] = None

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError:
            logger.warning("commit rejected by a unique constraint, rolling back")
            await self.session.rollback()
            raise

    async def begin(self) -> None:
        if self._transaction is None:
            self._transaction = await self.session.begin()

    async def commit_transaction(self) -> None:
        if self._transaction is not None:
            transaction, self._transaction = self._transaction, None
            await transaction.commit()

    async def rollback(self) -> None:
        if self._transaction is not None:
            transaction, self._transaction = self._transaction, None
            await transaction.rollback()
        else:
            await self.session.rollback()
