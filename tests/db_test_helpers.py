from __future__ import annotations

import threading
from typing import Any, Callable, List, Optional, Sequence


class FakeCursor:
    """DB-API cursor double recording executed statements."""

    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self._result_sets = [list(rs) for rs in conn.result_sets]
        self._descriptions = list(conn.descriptions)
        self._rowcounts = list(conn.extra_rowcounts)
        self._rows: List[Any] = []
        self.description: Optional[Sequence[Any]] = None
        self.rowcount = conn.rowcount
        self.closed = False
        self.cancelled = threading.Event()

    def execute(self, sql: str, params: Any = None) -> "FakeCursor":
        if self._conn.execute_error is not None:
            raise self._conn.execute_error
        self._conn.executed.append((sql, params))
        if self._conn.on_execute is not None:
            self._conn.on_execute(self)
        self._load_next()
        return self

    def _load_next(self) -> bool:
        if not self._descriptions:
            self.description = None
            self._rows = []
            return False
        self.description = self._descriptions.pop(0)
        self._rows = self._result_sets.pop(0)
        return True

    def nextset(self) -> bool:
        self._conn.nextset_calls += 1
        if self._conn.nextset_error is not None:
            raise self._conn.nextset_error
        if self._rowcounts:
            self.rowcount = self._rowcounts.pop(0)
            return True
        return self._load_next()

    def fetchone(self) -> Any:
        self._conn.fetch_calls += 1
        if self._conn.on_fetch is not None:
            self._conn.on_fetch(self)
        if not self._rows:
            return None
        return self._rows.pop(0)

    def cancel(self) -> None:
        self._conn.cancel_calls += 1
        self.cancelled.set()

    def close(self) -> None:
        self.closed = True
        self._conn.cursor_close_calls += 1


class FakeConnection:
    """DB-API connection double.

    `descriptions` and `result_sets` line up: one entry per result set, with
    `None` descriptions standing in for row-count-only results.
    `extra_rowcounts` are the counts of statements after the first one.
    """

    def __init__(
        self,
        *,
        rowcount: Any = 0,
        extra_rowcounts: Sequence[Any] = (),
        descriptions: Sequence[Any] = (),
        result_sets: Sequence[Sequence[Any]] = (),
        execute_error: Optional[BaseException] = None,
        nextset_error: Optional[BaseException] = None,
        on_execute: Optional[Callable[[FakeCursor], None]] = None,
        on_fetch: Optional[Callable[[FakeCursor], None]] = None,
    ):
        self.rowcount = rowcount
        self.extra_rowcounts = list(extra_rowcounts)
        self.descriptions = list(descriptions)
        self.result_sets = list(result_sets)
        self.execute_error = execute_error
        self.nextset_error = nextset_error
        self.on_execute = on_execute
        self.on_fetch = on_fetch
        self.executed: List[Any] = []
        self.timeout: Optional[int] = None
        self.close_calls = 0
        self.cursor_close_calls = 0
        self.cancel_calls = 0
        self.nextset_calls = 0
        self.fetch_calls = 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def close(self) -> None:
        self.close_calls += 1


class FakeConnect:
    """Connection factory double returning one prepared connection."""

    def __init__(self, conn: FakeConnection, on_connect: Any = None):
        self.conn = conn
        self.on_connect = on_connect
        self.connection_strings: List[str] = []

    def __call__(self, connection_string: str) -> FakeConnection:
        self.connection_strings.append(connection_string)
        if self.on_connect is not None:
            self.on_connect()
        return self.conn


def describe(*columns: str) -> List[tuple]:
    return [(name, None, None, None, None, None, True) for name in columns]
