"""
command and query handlers for person records.

each handler is one linear use case over a unit of work. expected business
outcomes (duplicates, unknown ids) come back as ``Failure`` results; anything
unexpected is left to propagate to the http layer.
"""
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from people_api.core.errors import UniquenessViolationError
from people_api.core.logging_config import get_logger
from people_api.core.result import Failure, Result, Success
from people_api.models import Person
from people_api.models.people import as_utc
from people_api.schemas import PersonCreate, PersonRead, PersonUpdate
from people_api.services.unit_of_work import UnitOfWork

logger = get_logger(__name__)

EMAIL_EXISTS = "Email already exists"
DOCUMENT_EXISTS = "Document already exists"
PERSON_NOT_FOUND = "Person not found"


def to_read(person: Person) -> PersonRead:
    """map a stored person to its response projection"""
    return PersonRead(
        id=person.id,
        first_name=person.first_name,
        last_name=person.last_name,
        email=person.email,
        birth_date=person.birth_date,
        document=person.document,
        active=person.active,
        full_name=person.full_name,
        age=person.age(),
        created_at=as_utc(person.created_at),
        updated_at=as_utc(person.updated_at) if person.updated_at else None,
    )


async def _uniqueness_errors(
    uow: UnitOfWork, email: str, document: Optional[str] = None, exclude_id: Optional[UUID] = None
) -> List[str]:
    # email first, then document
    errors = []
    if await uow.people.email_exists(email, exclude_id=exclude_id):
        errors.append(EMAIL_EXISTS)
    if document is not None and await uow.people.document_exists(document, exclude_id=exclude_id):
        errors.append(DOCUMENT_EXISTS)
    return errors


async def _commit_or_conflict(
    uow: UnitOfWork, email: str, document: Optional[str] = None, exclude_id: Optional[UUID] = None
) -> Optional[Failure]:
    """
    commit the unit of work. a concurrent writer may have taken the email or
    document between the pre-check and the commit; the unique index rejects
    it and the collision is reported the same way the pre-check would.
    """
    try:
        await uow.commit()
    except IntegrityError as exc:
        errors = await _uniqueness_errors(uow, email, document, exclude_id)
        if not errors:
            raise UniquenessViolationError(str(exc.orig)) from exc
        logger.warning(f"uniqueness conflict detected at commit: {'; '.join(errors)}")
        return Failure(errors)
    return None


async def create_person(uow: UnitOfWork, payload: PersonCreate) -> Result[PersonRead]:
    errors = await _uniqueness_errors(uow, payload.email, payload.document)
    if errors:
        return Failure(errors)

    person = Person.create(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        birth_date=payload.birth_date,
        document=payload.document,
    )
    await uow.people.add(person)

    conflict = await _commit_or_conflict(uow, payload.email, payload.document)
    if conflict is not None:
        return conflict

    logger.info(f"created person {person.id}")
    return Success(to_read(person))


async def update_person(uow: UnitOfWork, person_id: UUID, payload: PersonUpdate) -> Result[PersonRead]:
    person = await uow.people.get_by_id(person_id)
    if person is None:
        return Failure.of(PERSON_NOT_FOUND)

    # document is immutable, only the email is re-checked
    errors = await _uniqueness_errors(uow, payload.email, exclude_id=person_id)
    if errors:
        return Failure(errors)

    person.update_personal_info(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        birth_date=payload.birth_date,
    )
    await uow.people.update(person)

    conflict = await _commit_or_conflict(uow, payload.email, exclude_id=person_id)
    if conflict is not None:
        return conflict

    logger.info(f"updated person {person_id}")
    return Success(to_read(person))


async def delete_person(uow: UnitOfWork, person_id: UUID) -> Result[bool]:
    if await uow.people.get_by_id(person_id) is None:
        return Failure.of(PERSON_NOT_FOUND)

    await uow.people.delete(person_id)
    await uow.commit()
    logger.info(f"deleted person {person_id}")
    return Success(True)


async def get_person(uow: UnitOfWork, person_id: UUID) -> Result[PersonRead]:
    person = await uow.people.get_by_id(person_id)
    if person is None:
        return Failure.of(PERSON_NOT_FOUND)
    return Success(to_read(person))


async def list_people(uow: UnitOfWork, active_only: bool = False) -> List[PersonRead]:
    people: Sequence[Person]
    if active_only:
        people = await uow.people.get_active()
    else:
        people = await uow.people.get_all()
    return [to_read(person) for person in people]


async def _set_active(uow: UnitOfWork, person_id: UUID, active: bool) -> Result[PersonRead]:
    person = await uow.people.get_by_id(person_id)
    if person is None:
        return Failure.of(PERSON_NOT_FOUND)

    if active:
        person.activate()
    else:
        person.deactivate()
    await uow.people.update(person)
    await uow.commit()

    logger.info(f"{'activated' if active else 'deactivated'} person {person_id}")
    return Success(to_read(person))


async def activate_person(uow: UnitOfWork, person_id: UUID) -> Result[PersonRead]:
    return await _set_active(uow, person_id, True)


async def deactivate_person(uow: UnitOfWork, person_id: UUID) -> Result[PersonRead]:
    return await _set_active(uow, person_id, False)
