"""
Company endpoints.

Paths and query parameter names follow the established phone book
contract (``/Company/Add?Name=...``), which is why creation and
deletion are exposed through ``GET``.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from phonebook_api.app.core.db import get_db
from phonebook_api.app.core.errors import (
    CompanyInUseError,
    CompanyNotFoundError,
    DuplicateNameError,
    ValidationError,
)
from phonebook_api.app.schemas.company import CompanyRead
from phonebook_api.app.services.company_service import CompanyService

router = APIRouter()


@router.get("/Add", response_model=CompanyRead)
async def add_company(
    name: str = Query(..., alias="Name"),
    conn: sqlite3.Connection = Depends(get_db),
) -> CompanyRead:
    """Add a company with a unique name.

    Returns HTTP 409 if the name is taken and 422 if it is blank or
    longer than 120 characters.
    """
    try:
        return await CompanyService.create_company(conn, name)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get("/GetAll", response_model=List[CompanyRead])
async def get_all_companies(conn: sqlite3.Connection = Depends(get_db)) -> List[CompanyRead]:
    """Return every company with its current person count."""
    return await CompanyService.list_companies(conn)


@router.get("/Delete")
async def delete_company(
    company_id: int = Query(..., alias="id"),
    conn: sqlite3.Connection = Depends(get_db),
) -> Response:
    """Delete a company that has no persons.

    Returns HTTP 404 for an unknown id and 409 while persons still
    belong to the company.
    """
    try:
        await CompanyService.delete_company(conn, company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except CompanyInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return Response(status_code=status.HTTP_200_OK)
