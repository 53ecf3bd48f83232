import sqlite3

import pytest

from sqlrepl.metadata import Filter
from sqlrepl.sqlite_reader import SqliteMetadataReader


@pytest.fixture
def conn():
    c = sqlite3.connect(":memory:")
    c.executescript(
        """
        CREATE TABLE film (film_id INTEGER PRIMARY KEY, title TEXT NOT NULL, code TEXT UNIQUE);
        CREATE TABLE actor (actor_id INTEGER, last_name TEXT);
        CREATE INDEX idx_actor_last_name ON actor(last_name);
        CREATE INDEX idx_film_title ON film(title);
        CREATE VIEW film_list AS SELECT title FROM film;
        """
    )
    yield c
    c.close()


def test_schemas(conn):
    names = [s.schema for s in SqliteMetadataReader(conn).schemas(Filter())]
    assert ", ".join(names) == "main"


def test_tables_by_type(conn):
    tables = SqliteMetadataReader(conn).tables(Filter(types=["BASE TABLE", "TABLE", "VIEW"]))
    assert [t.name for t in tables] == ["actor", "film", "film_list"]
    assert [t.type for t in tables] == ["TABLE", "TABLE", "VIEW"]


def test_tables_limit(conn):
    tables = SqliteMetadataReader(conn, limit=1).tables(Filter(types=["TABLE", "VIEW"]))
    assert [t.name for t in tables] == ["actor"]


def test_columns(conn):
    cols = SqliteMetadataReader(conn).columns(Filter(parent="film%"))
    assert [(c.table, c.name) for c in cols] == [
        ("film", "code"), ("film", "film_id"), ("film", "title"), ("film_list", "title"),
    ]
    title = next(c for c in cols if c.table == "film" and c.name == "title")
    assert title.is_nullable == "NO"


def test_indexes(conn):
    idx = SqliteMetadataReader(conn).indexes(Filter())
    names = [f"{i.table}.{i.name}" for i in idx]
    assert "actor.idx_actor_last_name" in names
    assert "film.idx_film_title" in names
    auto = next(i for i in idx if i.name.startswith("sqlite_autoindex_film"))
    assert auto.is_unique == "YES"


def test_index_columns(conn):
    cols = SqliteMetadataReader(conn).index_columns(Filter(name="idx%"))
    assert [c.name for c in cols] == ["last_name", "title"]


def test_function_columns_empty(conn):
    assert SqliteMetadataReader(conn).function_columns(Filter()) == []