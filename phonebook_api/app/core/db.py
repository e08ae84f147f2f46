"""
SQLite storage for companies and persons.

This module opens database connections (``get_connection``), creates
the schema on application start (``init_db``) and provides the
``get_db`` dependency that hands every request its own connection.
Connections are never shared between requests; each one is closed
when the request finishes, whatever the outcome.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


SCHEMA = """
CREATE TABLE IF NOT EXISTS Company (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    companyName TEXT NOT NULL UNIQUE,
    registrationDate TIMESTAMP NOT NULL
);

CREATE TABLE IF NOT EXISTS Person (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    fullName TEXT NOT NULL,
    phoneNumber TEXT,
    address TEXT,
    companyId INTEGER NOT NULL,
    FOREIGN KEY(companyId) REFERENCES Company(id)
);

CREATE INDEX IF NOT EXISTS idx_person_company_id ON Person(companyId);
"""


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are returned unchanged; relative
    paths are resolved against the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.  Foreign keys are switched on for the lifetime of the
    connection; SQLite leaves them off by default.

    ``check_same_thread`` is disabled because FastAPI opens and closes
    the connection from its threadpool while the async endpoint uses it
    on the event loop thread.  A connection still serves one request only.
    """
    conn = sqlite3.connect(
        get_database_path(),
        timeout=settings.database_timeout,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding a per-request connection."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def init_db() -> None:
    """Create the ``Company`` and ``Person`` tables if they are missing."""
    with get_cursor() as cursor:
        cursor.executescript(SCHEMA)
