from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from phonebook_api.app.core.db import get_connection
from phonebook_api.app.core.errors import (
    CompanyInUseError,
    CompanyNotFoundError,
    DuplicateNameError,
    ValidationError,
)
from phonebook_api.app.schemas.company import CompanyRead
from phonebook_api.app.services.company_service import CompanyService
from phonebook_api.app.services.person_service import PersonService


def test_create_company_then_list_shows_it_once_with_no_persons(conn, run):
    before = datetime.now(timezone.utc)
    created = run(CompanyService.create_company(conn, "Writers"))
    assert created.id > 0
    assert created.company_name == "Writers"
    assert created.registration_date >= before

    companies = run(CompanyService.list_companies(conn))
    matching = [c for c in companies if c.company_name == "Writers"]
    assert len(matching) == 1
    assert matching[0].id == created.id
    assert matching[0].person_count == 0


def test_duplicate_company_name_is_rejected_and_count_unchanged(conn, run):
    run(CompanyService.create_company(conn, "Writers"))
    with pytest.raises(DuplicateNameError):
        run(CompanyService.create_company(conn, "Writers"))
    assert len(run(CompanyService.list_companies(conn))) == 1


def test_company_names_are_case_sensitive(conn, run):
    run(CompanyService.create_company(conn, "Writers"))
    run(CompanyService.create_company(conn, "writers"))
    names = [c.company_name for c in run(CompanyService.list_companies(conn))]
    assert names == ["Writers", "writers"]


@pytest.mark.parametrize("name", ["", "   ", "x" * 121])
def test_invalid_company_name_is_rejected_before_insert(conn, run, name):
    with pytest.raises(ValidationError):
        run(CompanyService.create_company(conn, name))
    assert run(CompanyService.list_companies(conn)) == []


def test_company_name_at_max_length_is_accepted(conn, run):
    created = run(CompanyService.create_company(conn, "x" * 120))
    assert len(created.company_name) == 120


def test_person_count_tracks_current_persons(conn, run):
    writers = run(CompanyService.create_company(conn, "Writers"))
    run(CompanyService.create_company(conn, "Painters"))
    ids = [
        run(PersonService.create_person(conn, name, "1234567890", None, "Writers")).id
        for name in ("William Shakespeare", "Dante Alighieri", "Homer")
    ]

    counts = {c.company_name: c.person_count for c in run(CompanyService.list_companies(conn))}
    assert counts == {"Writers": 3, "Painters": 0}

    run(PersonService.delete_person(conn, ids[0]))
    counts = {c.id: c.person_count for c in run(CompanyService.list_companies(conn))}
    assert counts[writers.id] == 2


def test_delete_company_without_persons(conn, run):
    company = run(CompanyService.create_company(conn, "Painters"))
    run(CompanyService.delete_company(conn, company.id))
    assert run(CompanyService.list_companies(conn)) == []


def test_delete_company_with_persons_is_rejected(conn, run):
    company = run(CompanyService.create_company(conn, "Writers"))
    run(PersonService.create_person(conn, "Homer", None, None, "Writers"))
    with pytest.raises(CompanyInUseError):
        run(CompanyService.delete_company(conn, company.id))
    companies = run(CompanyService.list_companies(conn))
    assert [(c.id, c.person_count) for c in companies] == [(company.id, 1)]


def test_delete_unknown_company(conn, run):
    with pytest.raises(CompanyNotFoundError):
        run(CompanyService.delete_company(conn, 42))


def test_concurrent_creates_of_one_name_leave_a_single_company(db_path, run):
    connections = [get_connection() for _ in range(2)]
    barrier = threading.Barrier(len(connections))

    def create(conn):
        barrier.wait()
        try:
            return run(CompanyService.create_company(conn, "Writers"))
        except DuplicateNameError as exc:
            return exc

    try:
        with ThreadPoolExecutor(max_workers=len(connections)) as pool:
            results = list(pool.map(create, connections))
    finally:
        for conn in connections:
            conn.close()

    assert len([r for r in results if isinstance(r, CompanyRead)]) == 1
    assert len([r for r in results if isinstance(r, DuplicateNameError)]) == 1

    conn = get_connection()
    try:
        companies = run(CompanyService.list_companies(conn))
    finally:
        conn.close()
    assert [c.company_name for c in companies] == ["Writers"]
