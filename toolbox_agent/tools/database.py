"""
Read-only SQL query tool backed by a SQLite connection.
"""

from __future__ import annotations

import logging
import re
import sqlite3
import threading
from typing import Any, Dict, Iterable

from ..core.primitives.actions import ToolParameters
from ..core.primitives.context import RunContext
from ..core.primitives.errors import (
    OperationCancelled,
    ReadOnlyViolation,
    ToolboxError,
    ToolExecutionError,
    ValidationError,
)
from ..core.primitives.tools import Tool

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"
_LEADING_KEYWORD = re.compile(r"\s*([A-Za-z]+)")


class QueryTool(Tool):
    """
    Executes read-only SQL against a database connection it owns.

    The connection is shared by every agent using the tool, so queries are
    serialized with a lock. Whoever builds the tool calls ``close`` once.
    """

    name = "query_database"
    description = "Execute SQL queries against the database. Only SELECT queries are allowed for safety."

    def __init__(
        self,
        connection: sqlite3.Connection,
        *,
        allowed_commands: Iterable[str] = ("SELECT",),
        progress_interval: int = 1000,
    ) -> None:
        self._conn = connection
        self._lock = threading.Lock()
        self.allowed_commands = frozenset(command.upper() for command in allowed_commands)
        self.progress_interval = progress_interval

    @classmethod
    def connect(cls, database: str, *, read_only: bool = False, **kwargs: Any) -> "QueryTool":
        """
        Open ``database`` (a file path, ``:memory:`` or a ``sqlite:///path``
        URL) and wrap it in a tool. ``read_only`` opens file databases in
        SQLite's read-only mode on top of the keyword check.
        """
        path = database[len(SQLITE_URL_PREFIX):] if database.startswith(SQLITE_URL_PREFIX) else database
        try:
            if read_only and path != ":memory:":
                connection = sqlite3.connect(f"file:{path}?mode=ro", uri=True, check_same_thread=False)
            else:
                connection = sqlite3.connect(path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise ToolboxError(f"failed to connect to database {path!r}: {exc}") from exc
        logger.info("Opened SQLite database: %s", path)
        return cls(connection, **kwargs)

    def schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The SQL query to execute (SELECT only)",
                },
            },
            "required": ["query"],
        }

    def execute(self, context: RunContext, parameters: ToolParameters) -> Dict[str, Any]:
        if "query" not in parameters:
            raise ValidationError("missing required parameter 'query'")
        query = parameters["query"]
        if not isinstance(query, str):
            raise ValidationError("query parameter must be a string")
        self._check_read_only(query)
        context.check()

        with self._lock:
            try:
                self._conn.set_progress_handler(lambda: 1 if context.cancelled else 0, self.progress_interval)
                cursor = self._conn.cursor()
                try:
                    logger.debug("Executing SQL: %.200s", query)
                    cursor.execute(query)
                    columns = [column[0] for column in cursor.description or ()]
                    rows = [
                        {column: _coerce_value(value) for column, value in zip(columns, row)}
                        for row in cursor.fetchall()
                    ]
                finally:
                    cursor.close()
                    self._conn.set_progress_handler(None, 0)
            except (sqlite3.Error, sqlite3.Warning) as exc:
                if context.cancelled:
                    raise OperationCancelled("query interrupted") from exc
                raise ToolExecutionError(f"query execution failed: {exc}") from exc

        logger.info("Query returned %d rows.", len(rows))
        return {"columns": columns, "rows": rows, "count": len(rows)}

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def _check_read_only(self, query: str) -> None:
        match = _LEADING_KEYWORD.match(query)
        if match is None or match.group(1).upper() not in self.allowed_commands:
            allowed = ", ".join(sorted(self.allowed_commands))
            raise ReadOnlyViolation(f"only {allowed} queries are allowed for safety")


def _coerce_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return value
