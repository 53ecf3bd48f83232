"""Records describing database objects, and the query builder readers share."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass
class Filter:
    """Selects which database objects a metadata reader returns."""

    catalog: str = ""
    schema: str = ""
    parent: str = ""
    name: str = ""
    types: list[str] = field(default_factory=list)
    with_system: bool = False
    only_visible: bool = False


@dataclass
class Catalog:
    catalog: str = ""


@dataclass
class Schema:
    schema: str = ""
    catalog: str = ""


@dataclass
class Table:
    catalog: str = ""
    schema: str = ""
    name: str = ""
    type: str = ""


@dataclass
class Column:
    catalog: str = ""
    schema: str = ""
    table: str = ""
    name: str = ""
    ordinal_position: int = 0
    data_type: str = ""
    is_nullable: str = ""
    default: str = ""
    column_size: int = 0
    decimal_digits: int = 0


@dataclass
class Function:
    catalog: str = ""
    schema: str = ""
    name: str = ""
    specific_name: str = ""
    type: str = ""


@dataclass
class Index:
    catalog: str = ""
    schema: str = ""
    table: str = ""
    name: str = ""
    is_unique: str = ""
    is_primary: str = ""
    type: str = ""


@dataclass
class IndexColumn:
    catalog: str = ""
    schema: str = ""
    table: str = ""
    index_name: str = ""
    name: str = ""
    data_type: str = ""
    ordinal_position: int = 0


@dataclass
class ColumnStat:
    catalog: str = ""
    schema: str = ""
    table: str = ""
    name: str = ""
    avg_width: int = 0
    num_distinct: int = 0
    null_frac: float = 0.0
    min: str = ""
    max: str = ""


def build_query(qstr: str, conds: Sequence[str], order: str, limit_clause: str) -> str:
    """Append WHERE, ORDER BY and a row-limit clause to ``qstr``."""
    if conds:
        qstr += "\nWHERE " + " AND ".join(conds)
    if order:
        qstr += "\nORDER BY " + order
    if limit_clause:
        qstr += "\n" + limit_clause
    return qstr