"""Microsoft SQL Server support: type formatting, errors and metadata reading."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .metadata import Catalog, Column, Filter, Index, IndexColumn, build_query

VERSION_QUERY = (
    "SELECT SERVERPROPERTY('productversion'), SERVERPROPERTY ('productlevel'), "
    "SERVERPROPERTY ('edition')"
)

SYSTEM_SCHEMAS = (
    "db_accessadmin",
    "db_backupoperator",
    "db_datareader",
    "db_datawriter",
    "db_ddladmin",
    "db_denydatareader",
    "db_denydatawriter",
    "db_owner",
    "db_securityadmin",
    "INFORMATION_SCHEMA",
    "sys",
)

_NOT_SYSTEM_COND = "s.name NOT IN (" + ", ".join(f"'{s}'" for s in SYSTEM_SCHEMAS) + ")"

_INDEXES_SQL = """
SELECT
  db_name(),
  s.name,
  t.name,
  COALESCE(i.name, ''),
  CASE WHEN i.is_primary_key = 1 THEN 'YES' ELSE 'NO' END,
  CASE WHEN i.is_unique = 1 THEN 'YES' ELSE 'NO' END,
  i.type_desc
FROM sys.schemas s
JOIN sys.tables t on t.schema_id = s.schema_id
JOIN sys.indexes i ON i.object_id = t.object_id
"""

_INDEX_COLUMNS_SQL = """
SELECT
  db_name(),
  s.name,
  t.name,
  COALESCE(i.name, ''),
  c.name,
  t.name,
  ic.key_ordinal
FROM sys.schemas s
JOIN sys.tables t on t.schema_id = s.schema_id
JOIN sys.indexes i ON i.object_id = t.object_id
JOIN sys.index_columns ic ON i.object_id = ic.object_id and i.index_id = ic.index_id
JOIN sys.columns c ON ic.object_id = c.object_id and ic.column_id = c.column_id
JOIN sys.types ty ON ty.user_type_id = c.user_type_id
"""


def placeholder(n: int) -> str:
    """Return the positional parameter placeholder for argument ``n``."""
    return f"@p{n}"


def data_type_formatter(column: Column) -> str:
    """Return the declared type of ``column``, omitting default sizes."""
    dt, size, digits = column.data_type, column.column_size, column.decimal_digits
    if dt in ("numeric", "decimal"):
        if size == 18 and digits == 0:
            return dt
        return f"{dt}({size},{digits})"
    if dt in ("datetimeoffset", "datetime2", "time"):
        return dt if size == 7 else f"{dt}({size})"
    if dt in ("char", "nchar", "binary"):
        return dt if size == 1 else f"{dt}({size})"
    if dt in ("varchar", "nvarchar", "varbinary"):
        if size == -1:
            return dt + "(max)"
        return dt if size == 1 else f"{dt}({size})"
    return dt


def split_error(message: BaseException | str) -> tuple[str, str]:
    """Split a server error into its error number and message.

    Errors carrying a ``number`` attribute give that number and their
    ``message``; anything else gives an empty code and the text from the last
    ``sqlserver:`` marker on.
    """
    if not isinstance(message, str):
        number = getattr(message, "number", None)
        if number is not None:
            return str(int(number)), str(getattr(message, "message", message))
    msg = str(message)
    i = msg.rfind("sqlserver:")
    if i != -1:
        msg = msg[i:]
    return "", msg


def _filter_conds(f: Filter) -> tuple[list[str], list[str]]:
    conds: list[str] = []
    vals: list[str] = []
    if f.only_visible:
        conds.append("s.name = schema_name()")
    if not f.with_system:
        conds.append(_NOT_SYSTEM_COND)
    for value, column in ((f.schema, "s.name"), (f.parent, "t.name"), (f.name, "i.name")):
        if value:
            vals.append(value)
            conds.append(f"{column} LIKE {placeholder(len(vals))}")
    return conds, vals


class SqlServerMetadataReader:
    """Reads catalogs and indexes from a SQL Server DB-API connection."""

    def __init__(self, conn: Any, limit: int = 0) -> None:
        self.conn = conn
        self.limit = limit

    def _query(self, qstr: str, conds: Sequence[str], order: str, vals: Sequence[Any]) -> list:
        limit = f"FETCH FIRST {self.limit} ROWS ONLY" if self.limit else ""
        cur = self.conn.cursor()
        try:
            cur.execute(build_query(qstr, conds, order, limit), tuple(vals))
            return list(cur.fetchall())
        finally:
            cur.close()

    def catalogs(self, f: Filter) -> list[Catalog]:
        """All databases on the server."""
        rows = self._query("SELECT name\nFROM sys.databases", [], "name", [])
        return [Catalog(catalog=row[0]) for row in rows]

    def indexes(self, f: Filter) -> list[Index]:
        """Indexes matching ``f``."""
        conds, vals = _filter_conds(f)
        rows = self._query(_INDEXES_SQL, conds, "s.name, t.name, i.name", vals)
        return [
            Index(
                catalog=cat, schema=sch, table=tbl, name=name,
                is_unique=unique, is_primary=primary, type=typ,
            )
            for cat, sch, tbl, name, unique, primary, typ in rows
        ]

    def index_columns(self, f: Filter) -> list[IndexColumn]:
        """Columns of indexes matching ``f``."""
        conds, vals = _filter_conds(f)
        rows = self._query(
            _INDEX_COLUMNS_SQL, conds, "s.name, t.name, i.name, ic.index_column_id", vals
        )
        return [
            IndexColumn(
                catalog=cat, schema=sch, table=tbl, index_name=idx,
                name=name, data_type=typ, ordinal_position=int(pos),
            )
            for cat, sch, tbl, idx, name, typ, pos in rows
        ]