from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DBConfig":
        return cls(
            host=str(raw["host"]),
            port=int(raw.get("port", 3306)),
            user=str(raw["user"]),
            password=str(raw["password"]),
            database=str(raw["database"]),
            connect_timeout=int(raw.get("connect_timeout", 10)),
        )


class DatabaseConnection:
    """Connection factory shared by the read repositories.

    Every operation opens its own short-lived connection, so fetches that the
    report service runs on worker threads never share one.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._config.connect_timeout,
        )
