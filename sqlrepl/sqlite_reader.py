"""Metadata reader for SQLite databases."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence

from .metadata import (
    Column,
    Filter,
    Function,
    Index,
    IndexColumn,
    Schema,
    Table,
    build_query,
)

_TABLES_SQL = r"""SELECT
  '' AS table_catalog,
  '' AS table_schem,
  table_name,
  table_type
FROM (
    SELECT
      name AS table_name,
      UPPER(type) AS table_type
    FROM sqlite_master
    WHERE name NOT LIKE 'sqlite\_%' ESCAPE '\' AND UPPER(type) IN ('TABLE', 'VIEW')
    UNION ALL
    SELECT
      name AS table_name,
      'GLOBAL TEMPORARY' AS table_type
    FROM sqlite_temp_master
    UNION ALL
    SELECT
      name AS table_name,
      'SYSTEM TABLE' AS table_type
    FROM sqlite_master
    WHERE name LIKE 'sqlite\_%' ESCAPE '\' AND UPPER(type) IN ('TABLE', 'VIEW')
    UNION ALL
    SELECT
      name AS table_name,
      'SYSTEM TABLE' AS table_type
    FROM pragma_module_list
)"""


class SqliteMetadataReader:
    """Reads catalog metadata from an SQLite connection."""

    def __init__(self, conn: sqlite3.Connection, limit: int = 0) -> None:
        self.conn = conn
        self.limit = limit

    def _query(self, qstr: str, conds: Sequence[str], order: str, *vals) -> list[tuple]:
        limit = f"LIMIT {self.limit}" if self.limit else ""
        return self.conn.execute(build_query(qstr, conds, order, limit), vals).fetchall()

    def columns(self, f: Filter) -> list[Column]:
        """Columns of the tables whose names match ``f.parent``."""
        tables = self.tables(Filter(catalog=f.catalog, schema=f.schema, name=f.parent))
        qstr = """SELECT
  cid,
  name,
  type,
  CASE WHEN "notnull" = 1 THEN 'NO' ELSE 'YES' END,
  COALESCE(dflt_value, '')
FROM pragma_table_info(?)"""
        return [
            Column(
                catalog=t.catalog, schema=t.schema, table=t.name,
                ordinal_position=pos, name=name, data_type=typ,
                is_nullable=nullable, default=default,
            )
            for t in tables
            for pos, name, typ, nullable, default in self._query(qstr, [], "name", t.name)
        ]

    def tables(self, f: Filter) -> list[Table]:
        """Tables, views and system tables matching ``f``."""
        conds: list[str] = []
        vals: list[str] = []
        if f.catalog:
            vals.append(f.catalog)
            conds.append("table_catalog = ?")
        if f.schema:
            vals.append(f.schema)
            conds.append("table_schema LIKE ?")
        if f.name:
            vals.append(f.name)
            conds.append("table_name LIKE ?")
        if f.types:
            vals.extend(f.types)
            conds.append("table_type IN (" + ", ".join("?" for _ in f.types) + ")")
        rows = self._query(_TABLES_SQL, conds, "table_type, table_name", *vals)
        return [Table(catalog=c, schema=s, name=n, type=t) for c, s, n, t in rows]

    def schemas(self, f: Filter) -> list[Schema]:
        """Attached databases matching ``f.name``."""
        qstr = """SELECT
  name AS schema_name,
  '' AS catalog_name
FROM pragma_database_list"""
        conds, vals = [], []
        if f.name:
            vals.append(f.name)
            conds.append("schema_name LIKE ?")
        return [Schema(schema=s, catalog=c) for s, c in self._query(qstr, conds, "seq", *vals)]

    def functions(self, f: Filter) -> list[Function]:
        """Built-in and registered functions matching ``f``."""
        qstr = """SELECT
  name AS specific_name,
  name AS routine_name,
  type AS routine_type
FROM pragma_function_list"""
        conds: list[str] = []
        vals: list[str] = []
        if f.name:
            vals.append(f.name)
            conds.append("name LIKE ?")
        if f.types:
            vals.extend(f.types)
            conds.append("type IN (" + ", ".join("?" for _ in f.types) + ")")
        rows = self._query(qstr, conds, "name, type", *vals)
        return [Function(specific_name=s, name=n, type=t) for s, n, t in rows]

    def function_columns(self, f: Filter) -> list:
        """SQLite exposes no function parameters; always empty."""
        return []

    def indexes(self, f: Filter) -> list[Index]:
        """Indexes matching ``f.parent`` (table) and ``f.name``."""
        qstr = """SELECT
  m.name,
  i.name,
  CASE WHEN i."unique" = 1 THEN 'YES' ELSE 'NO' END,
  CASE WHEN i.origin = 'pk' THEN 'YES' ELSE 'NO' END
FROM sqlite_master m
JOIN pragma_index_list(m.name) i"""
        conds, vals = ["m.type = 'table'"], []
        if f.parent:
            vals.append(f.parent)
            conds.append("m.name LIKE ?")
        if f.name:
            vals.append(f.name)
            conds.append("i.name LIKE ?")
        rows = self._query(qstr, conds, "m.name, i.seq", *vals)
        return [Index(table=t, name=n, is_unique=u, is_primary=p) for t, n, u, p in rows]

    def index_columns(self, f: Filter) -> list[IndexColumn]:
        """Columns of indexes matching ``f.parent`` and ``f.name``."""
        qstr = """SELECT
  m.name,
  i.name,
  ic.name,
  ic.seqno
FROM sqlite_master m
JOIN pragma_index_list(m.name) i
JOIN pragma_index_xinfo(i.name) ic"""
        conds, vals = ["m.type = 'table' AND ic.cid >= 0"], []
        if f.parent:
            vals.append(f.parent)
            conds.append("m.name LIKE ?")
        if f.name:
            vals.append(f.name)
            conds.append("i.name LIKE ?")
        rows = self._query(qstr, conds, "m.name, i.seq, ic.seqno", *vals)
        return [
            IndexColumn(table=t, index_name=i, name=n, ordinal_position=p)
            for t, i, n, p in rows
        ]