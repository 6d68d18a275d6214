"""Reserved words per engine.

Only consulted when keyword-checked quoting is requested.  The lists hold
the words each server refuses as bare identifiers.
"""
from __future__ import annotations

_SQL_COMMON: frozenset[str] = frozenset(
    {
        "ALL", "AND", "ANY", "AS", "ASC", "BETWEEN", "BOTH", "BY", "CASE",
        "CAST", "CHECK", "COLLATE", "COLUMN", "CONSTRAINT", "CREATE", "CROSS",
        "CURRENT_DATE", "CURRENT_TIME", "CURRENT_TIMESTAMP", "CURRENT_USER",
        "DEFAULT", "DELETE", "DESC", "DISTINCT", "DROP", "ELSE", "END",
        "EXCEPT", "EXISTS", "FALSE", "FOR", "FOREIGN", "FROM", "FULL", "GRANT",
        "GROUP", "HAVING", "IN", "INNER", "INSERT", "INTERSECT", "INTO", "IS",
        "JOIN", "LEADING", "LEFT", "LIKE", "LIMIT", "NATURAL", "NOT", "NULL",
        "ON", "OR", "ORDER", "OUTER", "PRIMARY", "REFERENCES", "RIGHT",
        "SELECT", "SET", "TABLE", "THEN", "TO", "TRAILING", "TRUE", "UNION",
        "UNIQUE", "UPDATE", "USER", "USING", "VALUES", "WHEN", "WHERE", "WITH",
    }
)

POSTGRES_KEYWORDS: frozenset[str] = _SQL_COMMON | frozenset(
    {
        "ANALYSE", "ANALYZE", "ARRAY", "ASYMMETRIC", "AUTHORIZATION", "BINARY",
        "CONCURRENTLY", "CURRENT_CATALOG", "CURRENT_ROLE", "CURRENT_SCHEMA",
        "DEFERRABLE", "DO", "FETCH", "FREEZE", "ILIKE", "INITIALLY", "ISNULL",
        "LATERAL", "LOCALTIME", "LOCALTIMESTAMP", "NOTNULL", "OFFSET", "ONLY",
        "OVERLAPS", "PLACING", "RETURNING", "SESSION_USER", "SIMILAR", "SOME",
        "SYMMETRIC", "SYSTEM_USER", "TABLESAMPLE", "VARIADIC", "VERBOSE",
        "WINDOW",
    }
)

MYSQL_KEYWORDS: frozenset[str] = _SQL_COMMON | frozenset(
    {
        "ACCESSIBLE", "ADD", "ALTER", "ANALYZE", "BEFORE", "BIGINT", "BINARY",
        "BLOB", "CALL", "CASCADE", "CHANGE", "CHAR", "CHARACTER", "CONDITION",
        "CONTINUE", "CONVERT", "CURSOR", "DATABASE", "DATABASES", "DAY_HOUR",
        "DAY_MINUTE", "DAY_SECOND", "DEC", "DECIMAL", "DECLARE", "DELAYED",
        "DESCRIBE", "DETERMINISTIC", "DISTINCTROW", "DIV", "DOUBLE", "DUAL",
        "EACH", "ELSEIF", "ENCLOSED", "ESCAPED", "EXIT", "EXPLAIN", "FETCH",
        "FLOAT", "FORCE", "FULLTEXT", "FUNCTION", "GENERATED", "GROUPS",
        "HIGH_PRIORITY", "IF", "IGNORE", "INDEX", "INFILE", "INOUT", "INT",
        "INTEGER", "INTERVAL", "ITERATE", "KEY", "KEYS", "KILL", "LEAVE",
        "LINEAR", "LINES", "LOAD", "LOCALTIME", "LOCALTIMESTAMP", "LOCK",
        "LONG", "LOOP", "LOW_PRIORITY", "MATCH", "MEDIUMINT", "MOD",
        "MODIFIES", "NUMERIC", "OPTIMIZE", "OPTION", "OPTIONALLY", "OUT",
        "OUTFILE", "OVER", "PARTITION", "PRECISION", "PROCEDURE", "PURGE",
        "RANGE", "RANK", "READ", "READS", "REAL", "RECURSIVE", "REGEXP",
        "RELEASE", "RENAME", "REPEAT", "REPLACE", "REQUIRE", "RESTRICT",
        "RETURN", "REVOKE", "RLIKE", "ROW", "ROWS", "SCHEMA", "SCHEMAS",
        "SEPARATOR", "SHOW", "SIGNAL", "SMALLINT", "SPATIAL", "SQL",
        "STARTING", "STRAIGHT_JOIN", "TERMINATED", "TINYINT", "TRIGGER",
        "UNDO", "UNLOCK", "UNSIGNED", "USAGE", "USE", "UTC_DATE", "UTC_TIME",
        "UTC_TIMESTAMP", "VARBINARY", "VARCHAR", "VARYING", "VIRTUAL",
        "WHILE", "WINDOW", "WRITE", "XOR", "YEAR_MONTH", "ZEROFILL",
    }
)

SQLITE_KEYWORDS: frozenset[str] = _SQL_COMMON | frozenset(
    {
        "ABORT", "ACTION", "ADD", "AFTER", "ALTER", "ALWAYS", "ANALYZE",
        "ATTACH", "AUTOINCREMENT", "BEFORE", "BEGIN", "CASCADE", "COMMIT",
        "CONFLICT", "DATABASE", "DEFERRABLE", "DEFERRED", "DETACH", "DO",
        "EACH", "ESCAPE", "EXCLUDE", "EXCLUSIVE", "EXPLAIN", "FAIL", "FILTER",
        "FIRST", "FOLLOWING", "GENERATED", "GLOB", "GROUPS", "IF", "IGNORE",
        "IMMEDIATE", "INDEX", "INDEXED", "INITIALLY", "INSTEAD", "ISNULL",
        "KEY", "LAST", "MATCH", "MATERIALIZED", "NO", "NOTHING", "NOTNULL",
        "NULLS", "OF", "OFFSET", "OTHERS", "OVER", "PARTITION", "PLAN",
        "PRAGMA", "PRECEDING", "QUERY", "RAISE", "RANGE", "RECURSIVE",
        "REGEXP", "REINDEX", "RELEASE", "RENAME", "REPLACE", "RESTRICT",
        "RETURNING", "ROLLBACK", "ROW", "ROWS", "SAVEPOINT", "TEMP",
        "TEMPORARY", "TIES", "TRANSACTION", "TRIGGER", "UNBOUNDED", "VACUUM",
        "VIEW", "VIRTUAL", "WINDOW", "WITHOUT",
    }
)
