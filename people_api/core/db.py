from typing import AsyncIterator

from fastapi import Depends
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from people_api.core.config import settings
from people_api.core.errors import DatabaseUnavailableError, retry_with_backoff
from people_api.core.logging_config import get_logger
from people_api.services.unit_of_work import SqlUnitOfWork, UnitOfWork

logger = get_logger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, pool_pre_ping=True)


@retry_with_backoff(
    max_retries=settings.DB_CONNECT_RETRIES,
    initial_delay=settings.DB_CONNECT_RETRY_DELAY,
    exceptions=(OperationalError, OSError),
)
async def _create_tables(bind) -> None:
    # importing the models registers their tables on the metadata
    import people_api.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def init_db(bind=None) -> None:
    """create missing tables, retrying while the database comes up"""
    try:
        await _create_tables(bind or engine)
    except (OperationalError, OSError) as e:
        raise DatabaseUnavailableError(f"database unreachable: {e}") from e
    logger.info("database initialised")


async def get_session() -> AsyncIterator[AsyncSession]:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


def get_unit_of_work(session: AsyncSession = Depends(get_session)) -> UnitOfWork:
    return SqlUnitOfWork(session)
