from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class DBConfig:
    path: str
    timeout: float = 5.0


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.path != config.path:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def path(self) -> str:
        return self._config.path

    def connect(self) -> sqlite3.Connection:
        if self._config.path != ":memory:":
            Path(self._config.path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._config.path, timeout=self._config.timeout)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn
