"""
Service layer for companies.

Companies are created with a unique name and a registration timestamp,
listed together with the number of persons attached to them and
deleted only while no person refers to them.  There is no update path.

Uniqueness of the company name is left to the ``UNIQUE`` constraint
on ``Company.companyName`` so that two concurrent inserts of the same
name are settled by SQLite: one succeeds, the other gets
``DuplicateNameError``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List

from phonebook_api.app.core.errors import (
    CompanyInUseError,
    CompanyNotFoundError,
    DuplicateNameError,
)
from phonebook_api.app.schemas.company import CompanyRead
from phonebook_api.app.services.validators import is_storable_id, validate_company_name


class CompanyService:
    """Service class for managing companies."""

    @classmethod
    async def create_company(cls, conn: sqlite3.Connection, name: str) -> CompanyRead:
        """Insert a new company and return it with its generated id.

        Raises ``ValidationError`` for a blank or overlong name and
        ``DuplicateNameError`` when the name is already taken.
        """
        logger = logging.getLogger(__name__)
        validate_company_name(name)
        registered_at = datetime.now(timezone.utc)
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO Company (companyName, registrationDate) VALUES (?, ?)",
                (name, registered_at.isoformat()),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "UNIQUE" not in str(exc):
                raise
            logger.warning("Company name %r already exists", name)
            raise DuplicateNameError(f"Company with CompanyName {name} already exists.") from exc
        company_id = cursor.lastrowid
        logger.info("Created company %s (%s)", company_id, name)
        return CompanyRead(
            id=company_id,
            company_name=name,
            registration_date=registered_at,
            person_count=0,
        )

    @classmethod
    async def list_companies(cls, conn: sqlite3.Connection) -> List[CompanyRead]:
        """Return all companies ordered by id with ``person_count`` filled in."""
        rows = conn.execute(
            """
            SELECT c.id, c.companyName, c.registrationDate, COUNT(p.id) AS personCount
            FROM Company c
            LEFT JOIN Person p ON p.companyId = c.id
            GROUP BY c.id, c.companyName, c.registrationDate
            ORDER BY c.id
            """
        ).fetchall()
        return [cls._row_to_company_read(row) for row in rows]

    @classmethod
    async def delete_company(cls, conn: sqlite3.Connection, company_id: int) -> None:
        """Delete a company that has no persons.

        Raises ``CompanyNotFoundError`` if the id is unknown and
        ``CompanyInUseError`` while persons still reference it.
        Nothing is deleted in either case.
        """
        logger = logging.getLogger(__name__)
        if not is_storable_id(company_id):
            raise CompanyNotFoundError(f"Company with Id {company_id} does not exist.")
        cursor = conn.cursor()
        exists = cursor.execute("SELECT id FROM Company WHERE id = ?", (company_id,)).fetchone()
        if not exists:
            raise CompanyNotFoundError(f"Company with Id {company_id} does not exist.")
        row = cursor.execute(
            "SELECT COUNT(*) AS count FROM Person WHERE companyId = ?", (company_id,)
        ).fetchone()
        if row["count"]:
            logger.warning("Refusing to delete company %s with %s persons", company_id, row["count"])
            raise CompanyInUseError(
                f"Company with Id {company_id} still has {row['count']} persons."
            )
        try:
            cursor.execute("DELETE FROM Company WHERE id = ?", (company_id,))
            conn.commit()
        except sqlite3.IntegrityError as exc:
            # A person was attached after the count above.
            conn.rollback()
            raise CompanyInUseError(f"Company with Id {company_id} still has persons.") from exc
        logger.info("Deleted company %s", company_id)

    @staticmethod
    def _row_to_company_read(row: sqlite3.Row) -> CompanyRead:
        """Convert a database row to a CompanyRead schema instance."""
        return CompanyRead(
            id=row["id"],
            company_name=row["companyName"],
            registration_date=row["registrationDate"],
            person_count=row["personCount"],
        )
