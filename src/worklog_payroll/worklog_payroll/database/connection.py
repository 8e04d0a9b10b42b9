from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.logger import get_logger

logger = get_logger("database")


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    time_zone: Optional[str] = None

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config.get("password", "")),
            database=str(db_config["database"]),
            time_zone=db_config.get("time_zone"),
        )


class DatabaseConnection:
    """Connection factory handed to every repository.

    Built once by the container, opened at startup and closed at shutdown.
    Each unit of work gets a short-lived connection from ``connect()``.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "DatabaseConnection":
        conn = self._new_connection()
        try:
            conn.ping(reconnect=False)
        finally:
            conn.close()
        self._open = True
        logger.info(
            "Database ready",
            extra={"db_host": self._config.host, "db_name": self._config.database},
        )
        return self

    def close(self) -> None:
        if self._open:
            self._open = False
            logger.info("Database handle closed", extra={"db_name": self._config.database})

    def connect(self):
        if not self._open:
            raise RuntimeError("DatabaseConnection is not open")
        return self._new_connection()

    def _new_connection(self):
        kwargs = dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
        if self._config.time_zone:
            kwargs["time_zone"] = self._config.time_zone
        return mysql.connector.connect(**kwargs)
