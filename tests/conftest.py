from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for imports like 'phonebook_api.app.main'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    from phonebook_api.app.core import db
    from phonebook_api.app.core.config import settings

    path = str(tmp_path / "phonebook.db")
    monkeypatch.setattr(settings, "database_url", path)
    db.init_db()
    return path


@pytest.fixture
def conn(db_path):
    from phonebook_api.app.core.db import get_connection

    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def run():
    """Drive a service coroutine to completion."""
    return asyncio.run


@pytest.fixture
def client(db_path):
    from fastapi.testclient import TestClient

    from phonebook_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client
