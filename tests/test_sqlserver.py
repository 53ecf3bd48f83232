import pytest

from sqlrepl.metadata import Column, Filter
from sqlrepl.sqlserver import (
    SqlServerMetadataReader,
    data_type_formatter,
    placeholder,
    split_error,
)


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, sql, params=()):
        self.conn.calls.append((sql, tuple(params)))

    def fetchall(self):
        return list(self.conn.rows)

    def close(self):
        self.conn.closed += 1


class FakeConnection:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.calls = []
        self.closed = 0

    def cursor(self):
        return FakeCursor(self)


@pytest.mark.parametrize(
    "data_type,size,digits,want",
    [
        ("bigint", 19, 0, "bigint"),
        ("numeric", 18, 0, "numeric"),
        ("numeric", 4, 2, "numeric(4,2)"),
        ("decimal", 18, 0, "decimal"),
        ("decimal", 4, 2, "decimal(4,2)"),
        ("bit", 1, 0, "bit"),
        ("smallint", 5, 0, "smallint"),
        ("smallmoney", 10, 4, "smallmoney"),
        ("int", 10, 0, "int"),
        ("tinyint", 3, 0, "tinyint"),
        ("money", 19, 4, "money"),
        ("float", 53, 0, "float"),
        ("real", 24, 0, "real"),
        ("date", 0, 0, "date"),
        ("datetimeoffset", 7, 0, "datetimeoffset"),
        ("datetimeoffset", 5, 0, "datetimeoffset(5)"),
        ("datetime2", 7, 0, "datetime2"),
        ("datetime2", 5, 0, "datetime2(5)"),
        ("smalldatetime", 0, 0, "smalldatetime"),
        ("datetime", 3, 0, "datetime"),
        ("time", 7, 0, "time"),
        ("time", 5, 0, "time(5)"),
        ("char", 1, 0, "char"),
        ("char", 3, 0, "char(3)"),
        ("varchar", 1, 0, "varchar"),
        ("varchar", 12, 0, "varchar(12)"),
        ("varchar", -1, 0, "varchar(max)"),
        ("text", 2147483647, 0, "text"),
        ("nchar", 1, 0, "nchar"),
        ("nchar", 2, 0, "nchar(2)"),
        ("nvarchar", 1, 0, "nvarchar"),
        ("nvarchar", 12, 0, "nvarchar(12)"),
        ("nvarchar", -1, 0, "nvarchar(max)"),
        ("ntext", 1073741823, 0, "ntext"),
        ("binary", 1, 0, "binary"),
        ("binary", 12, 0, "binary(12)"),
        ("varbinary", 1, 0, "varbinary"),
        ("varbinary", 12, 0, "varbinary(12)"),
        ("varbinary", -1, 0, "varbinary(max)"),
        ("image", 2147483647, 0, "image"),
        ("timestamp", 8, 0, "timestamp"),
        ("hierarchyid", 892, 0, "hierarchyid"),
        ("uniqueidentifier", 16, 0, "uniqueidentifier"),
        ("sql_variant", 8016, 0, "sql_variant"),
        ("xml", -1, 0, "xml"),
        ("geometry", -1, 0, "geometry"),
        ("geography", -1, 0, "geography"),
    ],
)
def test_data_type_formatter(data_type, size, digits, want):
    col = Column(data_type=data_type, column_size=size, decimal_digits=digits)
    assert data_type_formatter(col) == want


def test_placeholder():
    assert placeholder(1) == "@p1"
    assert placeholder(12) == "@p12"


def test_split_error_plain_message_trimmed():
    assert split_error("mssql: failure: sqlserver: bad thing") == ("", "sqlserver: bad thing")


def test_split_error_without_marker():
    assert split_error("some error") == ("", "some error")


def test_split_error_numbered_exception():
    class ServerError(Exception):
        number = 208
        message = "Invalid object name"

    assert split_error(ServerError("x")) == ("208", "Invalid object name")


def test_catalogs():
    conn = FakeConnection([("master",), ("sakila",)])
    reader = SqlServerMetadataReader(conn)
    result = reader.catalogs(Filter())
    assert [c.catalog for c in result] == ["master", "sakila"]
    sql, params = conn.calls[0]
    assert sql == "SELECT name\nFROM sys.databases\nORDER BY name"
    assert params == ()
    assert conn.closed == 1


def test_catalogs_with_limit():
    conn = FakeConnection([])
    SqlServerMetadataReader(conn, limit=5).catalogs(Filter())
    assert conn.calls[0][0].endswith("\nFETCH FIRST 5 ROWS ONLY")


def test_indexes_filter_and_mapping():
    row = ("sakila", "dbo", "actor", "idx_actor", "NO", "YES", "NONCLUSTERED")
    conn = FakeConnection([row])
    reader = SqlServerMetadataReader(conn)
    result = reader.indexes(Filter(schema="dbo", parent="act%", name="idx%", only_visible=True))
    assert len(result) == 1
    idx = result[0]
    assert (idx.catalog, idx.schema, idx.table, idx.name) == row[:4]
    assert idx.is_unique == "NO"
    assert idx.is_primary == "YES"
    assert idx.type == "NONCLUSTERED"
    sql, params = conn.calls[0]
    assert params == ("dbo", "act%", "idx%")
    assert "s.name = schema_name()" in sql
    assert "s.name LIKE @p1" in sql
    assert "t.name LIKE @p2" in sql
    assert "i.name LIKE @p3" in sql
    assert "'INFORMATION_SCHEMA', 'sys')" in sql
    assert sql.endswith("ORDER BY s.name, t.name, i.name")


def test_indexes_with_system_has_no_conditions():
    conn = FakeConnection([])
    assert SqlServerMetadataReader(conn).indexes(Filter(with_system=True)) == []
    assert "WHERE" not in conn.calls[0][0]


def test_index_columns():
    row = ("sakila", "dbo", "actor", "idx_actor", "last_name", "actor", 1)
    conn = FakeConnection([row])
    result = SqlServerMetadataReader(conn).index_columns(Filter(name="idx%"))
    assert [c.name for c in result] == ["last_name"]
    assert result[0].index_name == "idx_actor"
    assert result[0].ordinal_position == 1
    sql, params = conn.calls[0]
    assert params == ("idx%",)
    assert "i.name LIKE @p1" in sql
    assert sql.endswith("ORDER BY s.name, t.name, i.name, ic.index_column_id")