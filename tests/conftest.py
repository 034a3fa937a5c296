"""Pytest configuration and fixtures for techdash-mcp tests."""

import json
import sqlite3

import pytest

from techdash_mcp.utils.store import RequestStore


@pytest.fixture(autouse=True)
def db_path(tmp_path, monkeypatch):
    """Point the configured database at a fresh file for every test."""
    path = tmp_path / "requests.db"
    monkeypatch.setenv("TECHDASH_DB_PATH", str(path))
    return path


@pytest.fixture
def store(db_path):
    """A RequestStore on the per-test database."""
    return RequestStore(db_path)


@pytest.fixture
def legacy_rows(db_path):
    """Insert rows written by the old dashboard (display statuses, boolean task flags)."""
    RequestStore(db_path)
    rows = [
        (
            "4471",
            "AB12CDE",
            "Brakes",
            "Partially approved",
            None,
            json.dumps(
                [
                    {"desc": "Replace pads", "time": 0.5, "parts": True, "approved": True},
                    {"desc": "Check discs", "time": 0.3, "parts": False, "approved": False},
                ]
            ),
        ),
        ("4472", "XY34ZZZ", "Annual service", "Awaiting customer contact", 2.0, "[]"),
    ]
    with sqlite3.connect(db_path) as con:
        con.executemany(
            "INSERT INTO requests (vehicle_job_id, registration, work_description, status, "
            "overall_labour_hours, tasks) VALUES (?, ?, ?, ?, ?, ?)",
            rows,
        )
    con.close()
    return db_path


ORIGINAL_SCHEMA = """CREATE TABLE IF NOT EXISTS requests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    wip TEXT,
    reg TEXT,
    work TEXT,
    status TEXT,
    overallLabour REAL,
    tasks TEXT
)"""


@pytest.fixture
def original_schema_db(db_path):
    """A database created by the old dashboard server, with its column names."""
    rows = [
        (
            "4471",
            "AB12CDE",
            "Brakes",
            "Partially approved",
            None,
            json.dumps(
                [
                    {"desc": "Replace pads", "time": 0.5, "parts": True, "approved": True},
                    {"desc": "Check discs", "time": 0.3, "parts": False, "approved": False},
                ]
            ),
        ),
        ("4472", "XY34ZZZ", "Annual service", "Pending", 2.0, "[]"),
        ("4473", "CD56EFG", "MOT prep", "Authorised", 1.5, None),
    ]
    with sqlite3.connect(db_path) as con:
        con.execute(ORIGINAL_SCHEMA)
        con.executemany(
            "INSERT INTO requests (wip, reg, work, status, overallLabour, tasks) VALUES (?, ?, ?, ?, ?, ?)",
            rows,
        )
    con.close()
    return db_path
