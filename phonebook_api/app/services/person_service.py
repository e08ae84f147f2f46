"""
Service layer for persons.

A person always belongs to exactly one company.  Persons can be
created against an existing company name, listed or searched, picked
at random, replaced wholesale and deleted.

Search is a case-sensitive substring match on the full name, address,
phone number and company name.  ``instr()`` is used instead of
``LIKE`` because SQLite's ``LIKE`` ignores ASCII case; ``instr()`` on a
NULL column yields NULL, so empty optional fields never match.
"""

from __future__ import annotations

import logging
import random
import sqlite3
from typing import List, Optional

from phonebook_api.app.core.errors import (
    CompanyNotFoundError,
    NoPersonsError,
    PersonNotFoundError,
    ValidationError,
)
from phonebook_api.app.schemas.company import CompanyRead
from phonebook_api.app.schemas.person import PersonRead
from phonebook_api.app.services.validators import is_storable_id, validate_person_fields


PERSON_SELECT = """
    SELECT p.id, p.fullName, p.phoneNumber, p.address, p.companyId,
           c.companyName, c.registrationDate
    FROM Person p
    JOIN Company c ON c.id = p.companyId
"""

SEARCH_CLAUSE = """
    WHERE instr(p.fullName, :term) > 0
       OR instr(p.address, :term) > 0
       OR instr(p.phoneNumber, :term) > 0
       OR instr(c.companyName, :term) > 0
"""


class PersonService:
    """Service class for managing persons."""

    @classmethod
    async def create_person(
        cls,
        conn: sqlite3.Connection,
        full_name: str,
        phone_number: Optional[str],
        address: Optional[str],
        company_name: str,
    ) -> PersonRead:
        """Insert a person linked to the company called ``company_name``.

        The company is looked up by exact name.  If it does not exist
        ``CompanyNotFoundError`` is raised and nothing is written.
        """
        logger = logging.getLogger(__name__)
        validate_person_fields(full_name, phone_number, address)
        cursor = conn.cursor()
        company = cursor.execute(
            "SELECT id FROM Company WHERE companyName = ?", (company_name,)
        ).fetchone()
        if not company:
            logger.warning("Cannot add person %r: company %r not found", full_name, company_name)
            raise CompanyNotFoundError(f"Company with CompanyName {company_name} does not exist.")
        try:
            cursor.execute(
                "INSERT INTO Person (fullName, phoneNumber, address, companyId) VALUES (?, ?, ?, ?)",
                (full_name, phone_number, address, company["id"]),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            # The company was deleted between the lookup and the insert.
            conn.rollback()
            raise CompanyNotFoundError(f"Company with CompanyName {company_name} does not exist.") from exc
        person_id = cursor.lastrowid
        logger.info("Created person %s in company %s", person_id, company["id"])
        return await cls.get_person(conn, person_id)

    @classmethod
    async def list_persons(
        cls, conn: sqlite3.Connection, search_term: Optional[str] = None
    ) -> List[PersonRead]:
        """Return all persons, or those matching ``search_term``.

        An empty or missing ``search_term`` returns every person.  No
        match gives an empty list.
        """
        if search_term:
            rows = conn.execute(
                PERSON_SELECT + SEARCH_CLAUSE + " ORDER BY p.id", {"term": search_term}
            ).fetchall()
        else:
            rows = conn.execute(PERSON_SELECT + " ORDER BY p.id").fetchall()
        return [cls._row_to_person_read(row) for row in rows]

    @classmethod
    async def get_person(cls, conn: sqlite3.Connection, person_id: int) -> PersonRead:
        """Retrieve a single person by id or raise ``PersonNotFoundError``."""
        if not is_storable_id(person_id):
            raise PersonNotFoundError(f"Person with Id {person_id} does not exist.")
        row = conn.execute(PERSON_SELECT + " WHERE p.id = ?", (person_id,)).fetchone()
        if not row:
            raise PersonNotFoundError(f"Person with Id {person_id} does not exist.")
        return cls._row_to_person_read(row)

    @classmethod
    async def pick_random_person(
        cls, conn: sqlite3.Connection, rng: Optional[random.Random] = None
    ) -> PersonRead:
        """Return one person chosen uniformly at random.

        A rank ``r`` is drawn from ``[0, n)`` and the person holding the
        ``r``-th smallest id is returned, so gaps left by deleted ids do
        not skew the distribution.  If rows disappear between counting
        and fetching, the draw is repeated against the new count.
        """
        rng = rng or random.Random()
        while True:
            count = conn.execute("SELECT COUNT(*) AS count FROM Person").fetchone()["count"]
            if count == 0:
                raise NoPersonsError("There are no persons to pick from.")
            rank = rng.randrange(count)
            row = conn.execute(
                "SELECT id FROM Person ORDER BY id LIMIT 1 OFFSET ?", (rank,)
            ).fetchone()
            if row is None:
                continue
            try:
                return await cls.get_person(conn, row["id"])
            except PersonNotFoundError:
                continue

    @classmethod
    async def update_person(
        cls,
        conn: sqlite3.Connection,
        person_id: int,
        full_name: str,
        address: Optional[str],
        phone_number: Optional[str],
        company_id: Optional[int],
    ) -> PersonRead:
        """Replace the stored state of a person.

        Every field is overwritten with the value given, ``None``
        included.  Raises ``PersonNotFoundError`` for an unknown id and
        ``CompanyNotFoundError`` for an unknown company; in both cases
        the row is left untouched.
        """
        logger = logging.getLogger(__name__)
        cursor = conn.cursor()
        if not is_storable_id(person_id):
            raise PersonNotFoundError(f"Person with Id {person_id} does not exist.")
        exists = cursor.execute("SELECT id FROM Person WHERE id = ?", (person_id,)).fetchone()
        if not exists:
            raise PersonNotFoundError(f"Person with Id {person_id} does not exist.")
        validate_person_fields(full_name, phone_number, address)
        if company_id is None:
            raise ValidationError("Company id is required")
        if not is_storable_id(company_id):
            raise CompanyNotFoundError(f"Company with Id {company_id} does not exist.")
        company = cursor.execute("SELECT id FROM Company WHERE id = ?", (company_id,)).fetchone()
        if not company:
            raise CompanyNotFoundError(f"Company with Id {company_id} does not exist.")
        try:
            cursor.execute(
                """
                UPDATE Person
                SET fullName = ?, address = ?, phoneNumber = ?, companyId = ?
                WHERE id = ?
                """,
                (full_name, address, phone_number, company_id, person_id),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            raise CompanyNotFoundError(f"Company with Id {company_id} does not exist.") from exc
        if cursor.rowcount == 0:
            raise PersonNotFoundError(f"Person with Id {person_id} does not exist.")
        logger.info("Updated person %s", person_id)
        return await cls.get_person(conn, person_id)

    @classmethod
    async def delete_person(cls, conn: sqlite3.Connection, person_id: int) -> None:
        """Delete a person by id or raise ``PersonNotFoundError``."""
        logger = logging.getLogger(__name__)
        if not is_storable_id(person_id):
            raise PersonNotFoundError(f"Person with Id {person_id} does not exist.")
        cursor = conn.cursor()
        cursor.execute("DELETE FROM Person WHERE id = ?", (person_id,))
        affected = cursor.rowcount
        conn.commit()
        if not affected:
            raise PersonNotFoundError(f"Person with Id {person_id} does not exist.")
        logger.info("Deleted person %s", person_id)

    @staticmethod
    def _row_to_person_read(row: sqlite3.Row) -> PersonRead:
        """Convert a joined Person/Company row to a PersonRead schema instance."""
        return PersonRead(
            id=row["id"],
            full_name=row["fullName"],
            phone_number=row["phoneNumber"],
            address=row["address"],
            company_id=row["companyId"],
            company=CompanyRead(
                id=row["companyId"],
                company_name=row["companyName"],
                registration_date=row["registrationDate"],
            ),
        )
