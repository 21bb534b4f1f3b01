"""Shared fixtures for unit tests.

Provides an in-memory stand-in for a PostgreSQL server that understands the
handful of statements the publisher issues.
"""

import psycopg2
import psycopg2.errors
import pytest
from psycopg2 import sql


def render(query) -> str:
    """Render a psycopg2 ``sql`` composable without a live connection."""
    if isinstance(query, sql.Composed):
        return "".join(render(part) for part in query.seq)
    if isinstance(query, sql.SQL):
        return query.string
    if isinstance(query, sql.Identifier):
        return ".".join(f'"{part}"' for part in query.strings)
    return str(query)


class FakeDatabase:
    def __init__(self):
        self.tables: dict[str, list[tuple]] = {}
        self.indexes: set[str] = set()
        self.statements: list[str] = []
        self.configs = []
        self.opened = 0
        self.closed = 0
        self.insert_error: Exception | None = None

    def connect(self, config):
        self.configs.append(config)
        self.opened += 1
        return FakeConnection(self)

    def rows(self, table: str = '"info"') -> list[tuple]:
        return self.tables.get(table, [])


class FakeConnection:
    def __init__(self, db: FakeDatabase):
        self.db = db
        self.autocommit = False

    def cursor(self):
        return FakeCursor(self.db)

    def close(self):
        self.db.closed += 1


class FakeCursor:
    def __init__(self, db: FakeDatabase):
        self.db = db

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def execute(self, query, params=None):
        text = render(query).strip()
        self.db.statements.append(text)
        words = text.split()

        if text.startswith("INSERT INTO"):
            table = words[2]
            if table not in self.db.tables:
                raise psycopg2.errors.UndefinedTable(f"relation {table} does not exist")
            if self.db.insert_error is not None:
                raise self.db.insert_error
            self.db.tables[table].append(params)
        elif text.startswith("CREATE TABLE IF NOT EXISTS"):
            self.db.tables.setdefault(words[5], [])
        elif text.startswith("CREATE INDEX"):
            index = words[2]
            if index in self.db.indexes:
                raise psycopg2.errors.DuplicateTable(f"relation {index} already exists")
            self.db.indexes.add(index)


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def host_config():
    return {
        "hostname": "db.example",
        "port": 5432,
        "username": "postgres",
        "password": "",
        "database": "snap_test",
        "table_name": "info",
    }
