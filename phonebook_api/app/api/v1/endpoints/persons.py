"""
Person endpoints.

Not-found conditions (unknown company, unknown person, nothing to pick)
are answered with HTTP 404; field validation failures with 422.
"""

import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from phonebook_api.app.core.db import get_db
from phonebook_api.app.core.errors import (
    CompanyNotFoundError,
    NoPersonsError,
    PersonNotFoundError,
    ValidationError,
)
from phonebook_api.app.schemas.person import PersonRead, PersonUpdate
from phonebook_api.app.services.person_service import PersonService

router = APIRouter()


@router.get("/Add", response_model=PersonRead)
async def add_person(
    full_name: str = Query(..., alias="FullName"),
    phone_number: Optional[str] = Query(None, alias="PhoneNumber"),
    address: Optional[str] = Query(None, alias="Address"),
    company_name: str = Query(..., alias="CompanyName"),
    conn: sqlite3.Connection = Depends(get_db),
) -> PersonRead:
    """Add a person to the company called ``CompanyName``."""
    try:
        return await PersonService.create_person(conn, full_name, phone_number, address, company_name)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get("/GetAll", response_model=List[PersonRead])
async def get_all_persons(
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    conn: sqlite3.Connection = Depends(get_db),
) -> List[PersonRead]:
    """Return all persons, or those with any field containing ``searchTerm``.

    The match is case-sensitive and covers full name, address, phone
    number and company name.
    """
    return await PersonService.list_persons(conn, search_term)


@router.get("/WildCard", response_model=PersonRead)
async def get_random_person(conn: sqlite3.Connection = Depends(get_db)) -> PersonRead:
    """Return a randomly picked person, or 404 if there are none."""
    try:
        return await PersonService.pick_random_person(conn)
    except NoPersonsError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/Update", response_model=PersonRead)
async def update_person(
    person: PersonUpdate = Body(...),
    conn: sqlite3.Connection = Depends(get_db),
) -> PersonRead:
    """Replace a person's name, address, phone number and company."""
    try:
        return await PersonService.update_person(
            conn,
            person.id,
            person.full_name,
            person.address,
            person.phone_number,
            person.resolved_company_id(),
        )
    except (PersonNotFoundError, CompanyNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get("/Delete")
async def delete_person(
    person_id: int = Query(..., alias="id"),
    conn: sqlite3.Connection = Depends(get_db),
) -> Response:
    """Delete a person; 200 with an empty body, or 404 if the id is unknown."""
    try:
        await PersonService.delete_person(conn, person_id)
    except PersonNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_200_OK)
