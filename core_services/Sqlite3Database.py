import sqlite3
import time
from contextlib import closing
from typing import Any

from formrules.core_services.Database import LoggedDatabase


class Sqlite3Database(LoggedDatabase):
    connection_string: str = ""

    def __init__(self, connection_string: str = None):
        super().__init__()
        if connection_string is not None:
            self.connection_string = connection_string

    def connect(self):
        return sqlite3.connect(self.connection_string)

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        start_time = time.perf_counter()
        with closing(self.connect()) as connection:
            cursor = connection.execute(sql, tuple(params))
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            self._log_query(sql, tuple(params), elapsed_ms)

            if cursor.description is None:
                return []
            columns = [column[0] for column in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def save(self, sql: str, params: tuple = ()):
        with closing(self.connect()) as connection:
            connection.execute(sql, tuple(params))
            connection.commit()
