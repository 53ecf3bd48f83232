"""Classification of SQL statements by their leading keywords."""

from __future__ import annotations

QUERY_PREFIXES = frozenset(
    {
        "WITH",
        "PRAGMA",
        "EXPLAIN",
        "DESCRIBE",
        "DESC",
        "FETCH",
        "SELECT",
        "SHOW",
        "ADMIN SHOW",
        "VALUES",
        "LIST",
        "EXEC",
    }
)

EXEC_PREFIXES = frozenset(
    {
        # cassandra
        "ALTER KEYSPACE",
        "CREATE KEYSPACE",
        "DROP KEYSPACE",
        "BEGIN BATCH",
        "APPLY BATCH",
        # sqlserver
        "CREATE LOGIN",
        "CREATE PROCEDURE",
        "DROP LOGIN",
        "DROP PROCEDURE",
        # ql
        "BEGIN TRANSACTION",
        # postgresql
        "ABORT",
        "ALTER AGGREGATE",
        "ALTER COLLATION",
        "ALTER CONVERSION",
        "ALTER DATABASE",
        "ALTER DEFAULT PRIVILEGES",
        "ALTER DOMAIN",
        "ALTER EVENT TRIGGER",
        "ALTER EXTENSION",
        "ALTER FOREIGN DATA WRAPPER",
        "ALTER FOREIGN TABLE",
        "ALTER FUNCTION",
        "ALTER GROUP",
        "ALTER INDEX",
        "ALTER LANGUAGE",
        "ALTER LARGE OBJECT",
        "ALTER MATERIALIZED VIEW",
        "ALTER OPERATOR CLASS",
        "ALTER OPERATOR FAMILY",
        "ALTER OPERATOR",
        "ALTER POLICY",
        "ALTER ROLE",
        "ALTER RULE",
        "ALTER SCHEMA",
        "ALTER SEQUENCE",
        "ALTER SERVER",
        "ALTER SYSTEM",
        "ALTER TABLESPACE",
        "ALTER TABLE",
        "ALTER TEXT SEARCH CONFIGURATION",
        "ALTER TEXT SEARCH DICTIONARY",
        "ALTER TEXT SEARCH PARSER",
        "ALTER TEXT SEARCH TEMPLATE",
        "ALTER TRIGGER",
        "ALTER TYPE",
        "ALTER USER MAPPING",
        "ALTER USER",
        "ALTER VIEW",
        "ANALYZE",
        "BEGIN",
        "CHECKPOINT",
        "CLOSE",
        "CLUSTER",
        "COMMENT",
        "COMMIT PREPARED",
        "COMMIT",
        "COPY",
        "CREATE ACCESS METHOD",
        "CREATE AGGREGATE",
        "CREATE CAST",
        "CREATE COLLATION",
        "CREATE CONVERSION",
        "CREATE DATABASE",
        "CREATE DOMAIN",
        "CREATE EVENT TRIGGER",
        "CREATE EXTENSION",
        "CREATE FOREIGN DATA WRAPPER",
        "CREATE FOREIGN TABLE",
        "CREATE FUNCTION",
        "CREATE GROUP",
        "CREATE INDEX",
        "CREATE LANGUAGE",
        "CREATE MATERIALIZED VIEW",
        "CREATE OPERATOR CLASS",
        "CREATE OPERATOR FAMILY",
        "CREATE OPERATOR",
        "CREATE POLICY",
        "CREATE ROLE",
        "CREATE RULE",
        "CREATE SCHEMA",
        "CREATE SEQUENCE",
        "CREATE SERVER",
        "CREATE STATISTICS",
        "CREATE SUBSCRIPTION",
        "CREATE TABLE AS",
        "CREATE TABLESPACE",
        "CREATE TABLE",
        "CREATE TEXT SEARCH CONFIGURATION",
        "CREATE TEXT SEARCH DICTIONARY",
        "CREATE TEXT SEARCH PARSER",
        "CREATE TEXT SEARCH TEMPLATE",
        "CREATE TRANSFORM",
        "CREATE TRIGGER",
        "CREATE TYPE",
        "CREATE USER MAPPING",
        "CREATE USER",
        "CREATE VIEW",
        "DEALLOCATE ALL",
        "DEALLOCATE",
        "DECLARE",
        "DELETE",
        "DISCARD",
        "DO",
        "DROP ACCESS METHOD",
        "DROP AGGREGATE",
        "DROP CAST",
        "DROP COLLATION",
        "DROP CONVERSION",
        "DROP DATABASE",
        "DROP DOMAIN",
        "DROP EVENT TRIGGER",
        "DROP EXTENSION",
        "DROP FOREIGN DATA WRAPPER",
        "DROP FOREIGN TABLE",
        "DROP FUNCTION",
        "DROP GROUP",
        "DROP INDEX",
        "DROP LANGUAGE",
        "DROP MATERIALIZED VIEW",
        "DROP OPERATOR CLASS",
        "DROP OPERATOR FAMILY",
        "DROP OPERATOR",
        "DROP OWNED",
        "DROP POLICY",
        "DROP PUBLICATION",
        "DROP ROLE",
        "DROP RULE",
        "DROP SCHEMA",
        "DROP SEQUENCE",
        "DROP SERVER",
        "DROP STATISTICS",
        "DROP SUBSCRIPTION",
        "DROP TABLESPACE",
        "DROP TABLE",
        "DROP TEXT SEARCH CONFIGURATION",
        "DROP TEXT SEARCH DICTIONARY",
        "DROP TEXT SEARCH PARSER",
        "DROP TEXT SEARCH TEMPLATE",
        "DROP TRANSFORM",
        "DROP TRIGGER",
        "DROP TYPE",
        "DROP USER MAPPING",
        "DROP USER",
        "DROP VIEW",
        "END",
        "EXECUTE",
        "GRANT",
        "IMPORT FOREIGN SCHEMA",
        "INSERT",
        "LISTEN",
        "LOAD",
        "LOCK",
        "MOVE",
        "NOTIFY",
        "PREPARE TRANSACTION",
        "PREPARE",
        "REASSIGN OWNED",
        "REFRESH MATERIALIZED VIEW",
        "REINDEX",
        "RELEASE",
        "RESET",
        "REVOKE",
        "ROLLBACK PREPARED",
        "ROLLBACK TO SAVEPOINT",
        "ROLLBACK",
        "SAVEPOINT",
        "SECURITY LABEL",
        "SELECT INTO",
        "SET CONSTRAINTS",
        "SET ROLE",
        "SET SESSION AUTHORIZATION",
        "SET TRANSACTION",
        "SET",
        "START TRANSACTION",
        "TRUNCATE",
        "UNLISTEN",
        "UPDATE",
        "VACUUM",
    }
)

# Words after CREATE that do not change the kind of statement.
CREATE_IGNORE = frozenset(
    {
        "DEFAULT",
        "GLOBAL",
        "LOCAL",
        "OR",
        "PROCEDURAL",
        "RECURSIVE",
        "REPLACE",
        "TEMPORARY",
        "TEMP",
        "TRUSTED",
        "UNIQUE",
        "UNLOGGED",
    }
)


def query_exec_type(prefix: str, sqlstr: str) -> tuple[str, bool]:
    """Return the statement type for ``prefix`` and whether it returns rows.

    ``prefix`` is the upper-cased leading words of the statement; ``sqlstr``
    is the full statement text.
    """
    if prefix == "":
        return "EXEC", False
    words = prefix.split(" ")
    first = words[0]
    if first in QUERY_PREFIXES:
        if first == "SELECT" and len(words) >= 2 and words[1] == "INTO":
            return "SELECT INTO", False
        if first == "PRAGMA":
            return first, "=" not in sqlstr
        return first, True

    if first == "CREATE":
        words = [first, *(w for w in words[1:] if w not in CREATE_IGNORE)]
    elif first == "DROP":
        words = [first, *(w for w in words[1:] if w != "PROCEDURAL")]

    for end in range(len(words), 0, -1):
        typ = " ".join(words[:end])
        if typ in EXEC_PREFIXES:
            return typ, False
    return words[0], False