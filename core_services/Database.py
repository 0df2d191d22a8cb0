import logging
import os
import pprint
from typing import Any, Protocol


class Database(Protocol):
    """Tabular data store consumed by rules such as ``unique``."""

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        ...


class LoggedDatabase:
    """Shared query logging for concrete data stores."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.logging_enabled = os.getenv("DB_DEBUG", 'false').lower() == "true"
        self.logger = logging.getLogger("formrules.sql")
        if not self.logger.handlers:  # prevent duplicate handlers
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s"
            ))
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

    def _log_query(self, sql: str, params: tuple, elapsed_ms: float):
        if self.logging_enabled:
            log_entry = {
                "event": "sql_query",
                "sql": sql,
                "params": params,
                "elapsed_ms": round(elapsed_ms, 2),
                "database": self.__class__.__name__,
            }
            self.logger.debug("\n" + pprint.pformat(log_entry, indent=2, width=80, compact=False) + "\n")
