from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "waka_transport"
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host", defaults.host)),
            port=int(db_config.get("port", defaults.port)),
            user=str(db_config.get("user", defaults.user)),
            password=str(db_config.get("password", defaults.password)),
            database=str(db_config.get("database", defaults.database)),
            connect_timeout=int(db_config.get("connect_timeout", defaults.connect_timeout)),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Connection factory shared by every MySQL repository.

    Each call to ``connect`` opens a new connection; request threads and the
    reminder thread never share one.
    """

    def __init__(self, config: DBConfig):
        self.config = config

    def connect(self, *, with_database: bool = True):
        kwargs: dict[str, Any] = dict(
            host=self.config.host,
            port=self.config.port,
            user=self.config.user,
            password=self.config.password,
            connection_timeout=self.config.connect_timeout,
            use_pure=True,
        )
        if with_database:
            kwargs["database"] = self.config.database
        return mysql.connector.connect(**kwargs)
