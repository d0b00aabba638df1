from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, Optional, Union

from .connection import DatabaseConnection, DBConfig

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

_DB_LEVEL_STATEMENT = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def split_sql(sql: str) -> Iterator[str]:
    """Split a script on ';' that sit outside quoted literals."""
    quote: Optional[str] = None
    start = 0
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def ensure_database_exists(db: DatabaseConnection) -> None:
    conn = db.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{db.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Union[str, Path] = SCHEMA_PATH) -> None:
    """Create the database (if needed) and run schema.sql against it.

    The schema only uses CREATE TABLE IF NOT EXISTS, so this is safe on every startup.
    """
    db = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(db)
    sql = _DB_LEVEL_STATEMENT.sub("", Path(schema_path).read_text(encoding="utf-8"))

    conn = db.connect()
    try:
        cur = conn.cursor()
        for stmt in split_sql(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
