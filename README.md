# sqlrepl

Building blocks for an interactive, multi-database SQL command-line client.

## What is inside

- `sqlrepl.qtype.query_exec_type(prefix, sqlstr)` decides whether a
  statement returns rows (a query) or not (an exec), and what name to report
  for it. `prefix` is the upper-cased leading words of the statement. For
  example `("CREATE TABLE", False)` for `CREATE TEMP TABLE`, `("SELECT", True)`
  for `SELECT`, `("SELECT INTO", False)` for `SELECT INTO`, and for `PRAGMA`
  a query only when the statement has no `=`.
- `sqlrepl.metadata` holds the record dataclasses (`Filter`, `Catalog`,
  `Schema`, `Table`, `Column`, `Function`, `Index`, `IndexColumn`,
  `ColumnStat`) and `build_query`, which appends `WHERE`, `ORDER BY` and a
  row-limit clause to a query.
- `sqlrepl.sqlite_reader.SqliteMetadataReader` reads tables, columns,
  schemas, functions, indexes and index columns from a `sqlite3` connection,
  each method taking a `Filter` and returning a list of records.
  `function_columns` always returns an empty list.
- `sqlrepl.sqlserver` has `SqlServerMetadataReader` (catalogs, indexes and
  index columns from a DB-API connection to SQL Server), `data_type_formatter`
  (a column's declared type with default sizes left out, such as `numeric`
  for `numeric(18,0)` or `varchar(max)`), `placeholder` (`@p1`, `@p2`, ...)
  and `split_error`, which splits a server error into its number and message.
- `sqlrepl.sqlitetime` parses the timestamp formats SQLite stores
  (`parse_sqlite_time`), formats datetimes with Go-style reference layouts
  (`format_go_time`), and `convert_bytes` reformats a byte value when it
  holds a timestamp.
- `sqlrepl.textutil` has `is_empty` and `last_color`, for deciding whether a
  line has printable text and which ANSI colors are still active at its end.
- `sqlrepl.gen` builds the Markdown driver table for the project
  documentation.

## Installing

```
pip install .
```

## Examples

```python
from sqlrepl.qtype import query_exec_type

query_exec_type("CREATE OR REPLACE VIEW", "create or replace view v as select 1")
# ('CREATE VIEW', False)
query_exec_type("SELECT", "select 1")
# ('SELECT', True)
```

Reading SQLite metadata:

```python
import sqlite3
from sqlrepl.metadata import Filter
from sqlrepl.sqlite_reader import SqliteMetadataReader

conn = sqlite3.connect("app.db")
reader = SqliteMetadataReader(conn)
for table in reader.tables(Filter(types=["TABLE", "VIEW"])):
    print(table.name)
for index in reader.indexes(Filter(name="idx%")):
    print(index.table, index.name)
```

Formatting a SQL Server column type:

```python
from sqlrepl.metadata import Column
from sqlrepl.sqlserver import data_type_formatter

data_type_formatter(Column(data_type="decimal", column_size=4, decimal_digits=2))
# 'decimal(4,2)'
```

## Regenerating the driver table

```
sqlrepl-gen
```

Run it from the project root. It reads each driver description from
`drivers/<tag>/<tag>.go` (the doc comment above the package clause, which
must start `Package <tag> defines and registers sqlrepl's ...`, with `See:`,
and optionally `Alias:` and `Group:` lines) and rewrites the text between
`<!-- DRIVER DETAILS START -->` and `<!-- DRIVER DETAILS END -->` in
`README.md`. Options:

- `--root DIR`: the project root (default: the current directory).
- `--readme PATH`: the file to rewrite (default: `ROOT/README.md`).
- `--alias SCHEME=A,B`: scheme aliases to list for a driver; may be repeated.

It exits with status 1 and prints the error when a description cannot be
parsed or the markers are missing.

## What it does not do

This package has no interactive prompt or command loop, no variable or
print-setting store, no quoting or shell and editor helpers, and no driver
registry: it does not open database connections itself. The metadata readers
work on a connection you open with your own database module. Trino and
column-statistics reading are not included.

## Running the tests

```
pip install .[test]
pytest
```