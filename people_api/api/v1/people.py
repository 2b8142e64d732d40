from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from people_api.core.db import get_unit_of_work
from people_api.core.logging_config import AppLogger, get_app_logger
from people_api.core.result import Failure
from people_api.schemas import (
    NotFoundResponse,
    PersonCreate,
    PersonRead,
    PersonUpdate,
    ServerErrorResponse,
    ValidationErrorResponse,
)
from people_api.services import people as handlers
from people_api.services.unit_of_work import UnitOfWork

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ValidationErrorResponse},
    404: {"model": NotFoundResponse},
    500: {"model": ServerErrorResponse},
}


def bad_request(failure: Failure) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": failure.message, "errors": failure.errors})


def not_found(failure: Failure) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": failure.message})


def server_error(message: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": message, "error": str(exc)})


def is_not_found(failure: Failure) -> bool:
    return failure.errors == [handlers.PERSON_NOT_FOUND]


@router.get("", response_model=List[PersonRead], responses=ERROR_RESPONSES)
async def list_people(
    active_only: bool = Query(default=False, alias="activeOnly"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    """list people, optionally only the active ones"""
    try:
        log.info("listing people", active_only=active_only)
        with log.timed("list_people", active_only=active_only):
            people = await handlers.list_people(uow, active_only=active_only)
        return people
    except Exception as e:
        log.error("error listing people", e, active_only=active_only)
        return server_error("An error occurred while listing people", e)


@router.get("/{person_id}", response_model=PersonRead, responses=ERROR_RESPONSES, name="get_person")
async def get_person(
    person_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    try:
        with log.timed("get_person", person_id=person_id):
            result = await handlers.get_person(uow, person_id)
        if isinstance(result, Failure):
            log.warning("person not found", person_id=person_id)
            return not_found(result)
        return result.value
    except Exception as e:
        log.error("error fetching person", e, person_id=person_id)
        return server_error("An error occurred while fetching the person", e)


@router.post("", response_model=PersonRead, status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
async def create_person(
    payload: PersonCreate,
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    try:
        log.info("creating person", first_name=payload.first_name, last_name=payload.last_name)
        with log.timed("create_person"):
            result = await handlers.create_person(uow, payload)
        if isinstance(result, Failure):
            log.business_error("create_person", result.message)
            return bad_request(result)

        person = result.value
        log.audit("create_person", person_id=person.id, full_name=person.full_name)
        response.headers["Location"] = str(request.url_for("get_person", person_id=str(person.id)))
        return person
    except Exception as e:
        log.error("error creating person", e, first_name=payload.first_name, last_name=payload.last_name)
        return server_error("An internal error occurred while creating the person", e)


@router.put("/{person_id}", response_model=PersonRead, responses=ERROR_RESPONSES)
async def update_person(
    person_id: UUID,
    payload: PersonUpdate,
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    try:
        log.info("updating person", person_id=person_id)
        with log.timed("update_person", person_id=person_id):
            result = await handlers.update_person(uow, person_id, payload)
        if isinstance(result, Failure):
            log.business_error("update_person", result.message, person_id=person_id)
            return not_found(result) if is_not_found(result) else bad_request(result)

        log.audit("update_person", person_id=person_id)
        return result.value
    except Exception as e:
        log.error("error updating person", e, person_id=person_id)
        return server_error("An internal error occurred while updating the person", e)


@router.delete(
    "/{person_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
)
async def delete_person(
    person_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    try:
        log.info("deleting person", person_id=person_id)
        with log.timed("delete_person", person_id=person_id):
            result = await handlers.delete_person(uow, person_id)
        if isinstance(result, Failure):
            log.warning("person not found", person_id=person_id)
            return not_found(result)

        log.audit("delete_person", person_id=person_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        log.error("error deleting person", e, person_id=person_id)
        return server_error("An internal error occurred while deleting the person", e)


@router.patch("/{person_id}/activate", response_model=PersonRead, responses=ERROR_RESPONSES)
async def activate_person(
    person_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    try:
        result = await handlers.activate_person(uow, person_id)
        if isinstance(result, Failure):
            return not_found(result)
        log.audit("activate_person", person_id=person_id)
        return result.value
    except Exception as e:
        log.error("error activating person", e, person_id=person_id)
        return server_error("An internal error occurred while activating the person", e)


@router.patch("/{person_id}/deactivate", response_model=PersonRead, responses=ERROR_RESPONSES)
async def deactivate_person(
    person_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    log: AppLogger = Depends(get_app_logger),
):
    try:
        result = await handlers.deactivate_person(uow, person_id)
        if isinstance(result, Failure):
            return not_found(result)
        log.audit("deactivate_person", person_id=person_id)
        return result.value
    except Exception as e:
        log.error("error deactivating person", e, person_id=person_id)
        return server_error("An internal error occurred while deactivating the person", e)
