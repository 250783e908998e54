"""Async stored procedure executor over a DB-API connection factory."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import (
    Any,
    AsyncIterator,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from ...core._async_utils import _maybe_await, _raise_if_cancelled, _run_blocking
from ...core.config import SqlConfigOption
from ...core.errors import DatabaseError
from ...core.parameters import DbParameter
from ...core.records import record_mapping, row_to_record
from ...core.types import RowMapping, ScalarParams
from .dialects import SqlServerDialect
from .pyodbc_connector import PyodbcConnector, translate_driver_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorTranslator = Callable[[BaseException], Optional[DatabaseError]]


class AsyncDatabaseManager:
    """Execute stored procedures with one connection per call.

    Args:
        config: Connection string and command timeout.
        connect: Callable opening a DB-API connection (sync or async) from a
            connection string. Defaults to `PyodbcConnector()`.
        dialect: Statement builder. Defaults to `SqlServerDialect()`.
        error_translator: Maps driver exceptions to `DatabaseError`; returns
            None for exceptions that are not database failures.
    """

    def __init__(
        self,
        config: SqlConfigOption,
        connect: Optional[Callable[[str], Any]] = None,
        dialect: Optional[SqlServerDialect] = None,
        error_translator: Optional[ErrorTranslator] = None,
    ):
        self.config = config
        self._connect = connect or PyodbcConnector()
        self.dialect = dialect or SqlServerDialect()
        self._translate_error = error_translator or translate_driver_error

    async def execute_non_query(
        self,
        procedure_name: str,
        parameters: Optional[Iterable[DbParameter]] = None,
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> Optional[int]:
        """Execute a stored procedure that returns no rows.

        Every result of the call is consumed so that errors raised after the
        first statement surface here.

        Returns:
            Total rows affected across all statements, `-1` when the server
            sent no count, or None when the driver exposes no count at all.

        Raises:
            DatabaseError: After logging it once, for any database failure.
            asyncio.CancelledError: When `cancellation` is set while the
                connection opens or the command runs.
        """

        try:
            logger.info("Executing SQL: %s", procedure_name)
            sql, values = self._fill_sql_parameters(procedure_name, parameters)
            async with self._open_connection(cancellation) as conn:
                cur = await self._prepare_cursor(conn)
                try:
                    await self._run_cancellable(cur, cancellation, cur.execute, sql, values)
                    rowcounts = [getattr(cur, "rowcount", None)]
                    while await self._next_result(cur, cancellation):
                        rowcounts.append(getattr(cur, "rowcount", None))
                finally:
                    await self._close_cursor(cur)
            logger.info("SQL executed successfully: %s", procedure_name)
        except Exception as exc:
            error = self._translate_error(exc)
            if error is None:
                raise
            self._log_sql_error(procedure_name, error)
            if error is exc:
                raise
            raise error from exc

        return _total_rows_affected(rowcounts)

    async def execute_reader(
        self,
        record_type: Type[T],
        procedure_name: str,
        parameters: ScalarParams = None,
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> List[T]:
        """Execute a stored procedure and map every returned row to `record_type`."""

        return [
            record
            async for record in self.stream_reader(
                record_type, procedure_name, parameters, cancellation=cancellation
            )
        ]

    async def stream_reader(
        self,
        record_type: Type[T],
        procedure_name: str,
        parameters: ScalarParams = None,
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> AsyncIterator[T]:
        """Yield one `record_type` per row of the first result set.

        Rows are fetched one at a time while the connection stays open; the
        connection is released when iteration ends or the iterator is closed.
        Driver failures are raised as `DatabaseError` without being logged.
        """

        record_mapping(record_type)
        sql, values = self._add_parameters(procedure_name, parameters)
        try:
            async with self._open_connection(cancellation) as conn:
                cur = await self._prepare_cursor(conn)
                try:
                    await self._run_cancellable(cur, cancellation, cur.execute, sql, values)
                    if not await self._advance_to_rows(cur, cancellation):
                        return
                    while True:
                        row = await self._run_cancellable(cur, cancellation, cur.fetchone)
                        if row is None:
                            break
                        yield row_to_record(record_type, self._row_to_mapping(cur, row))
                finally:
                    await self._close_cursor(cur)
        except Exception as exc:
            error = self._translate_error(exc)
            if error is None or error is exc:
                raise
            raise error from exc

    def _fill_sql_parameters(
        self,
        procedure_name: str,
        parameters: Optional[Iterable[DbParameter]],
    ) -> Tuple[str, List[Any]]:
        names: List[str] = []
        values: List[Any] = []
        for param in parameters or ():
            names.append(param.name)
            values.append(self.dialect.bind_value(param))
        return self.dialect.procedure_call(procedure_name, names), values

    def _add_parameters(
        self,
        procedure_name: str,
        parameters: ScalarParams,
    ) -> Tuple[str, List[Any]]:
        if parameters is None:
            return self.dialect.procedure_call(procedure_name, []), []
        names = list(parameters.keys())
        values = [self.dialect.bind_scalar(parameters[name]) for name in names]
        return self.dialect.procedure_call(procedure_name, names), values

    @contextlib.asynccontextmanager
    async def _open_connection(
        self, cancellation: Optional[asyncio.Event]
    ) -> AsyncIterator[Any]:
        _raise_if_cancelled(cancellation)
        conn = await _run_blocking(self._connect, self.config.connection_string)
        try:
            _raise_if_cancelled(cancellation)
            conn.timeout = self.config.command_timeout
            yield conn
        finally:
            close = getattr(conn, "close", None)
            if callable(close):
                await _run_blocking(close)

    async def _run_cancellable(
        self,
        cur: Any,
        cancellation: Optional[asyncio.Event],
        fn: Callable[..., Any],
        *args: Any,
    ) -> Any:
        """Run one cursor call, aborting it when `cancellation` is set.

        An in-flight call is interrupted with `cursor.cancel()`; the event is
        checked again once the call returns.
        """

        _raise_if_cancelled(cancellation)
        if cancellation is None:
            return await _run_blocking(fn, *args)

        call = asyncio.ensure_future(_run_blocking(fn, *args))
        waiter = asyncio.ensure_future(cancellation.wait())
        try:
            await asyncio.wait({call, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            call.cancel()
            raise
        finally:
            waiter.cancel()

        if not call.done():
            await self._cancel_cursor(cur)
            try:
                await call
            except Exception as exc:
                raise asyncio.CancelledError("operation cancelled by caller") from exc
            raise asyncio.CancelledError("operation cancelled by caller")

        result = call.result()
        _raise_if_cancelled(cancellation)
        return result

    async def _prepare_cursor(self, conn: Any) -> Any:
        return await _maybe_await(conn.cursor())

    async def _cancel_cursor(self, cur: Any) -> None:
        cancel = getattr(cur, "cancel", None)
        if callable(cancel):
            await _run_blocking(cancel)

    async def _close_cursor(self, cur: Any) -> None:
        close = getattr(cur, "close", None)
        if callable(close):
            await _run_blocking(close)

    async def _next_result(self, cur: Any, cancellation: Optional[asyncio.Event]) -> bool:
        nextset = getattr(cur, "nextset", None)
        if not callable(nextset):
            return False
        return bool(await self._run_cancellable(cur, cancellation, nextset))

    async def _advance_to_rows(self, cur: Any, cancellation: Optional[asyncio.Event]) -> bool:
        """Skip leading result sets that carry no columns (row-count messages)."""

        while getattr(cur, "description", None) is None:
            if not await self._next_result(cur, cancellation):
                return False
        return True

    def _row_to_mapping(self, cursor: Any, row: Any) -> RowMapping:
        """Normalize row object to mapping.

        Supports mapping rows directly and tuple/list/`pyodbc.Row` rows via
        `cursor.description`. With duplicate column names the first wins.
        """

        if isinstance(row, Mapping):
            return row

        desc = getattr(cursor, "description", None)
        if not desc:
            raise TypeError("Cursor has no description; cannot map rows to dict.")
        cols = [d[0] for d in desc]
        mapped: Dict[str, Any] = {}
        for col, value in zip(cols, tuple(row), strict=True):
            mapped.setdefault(col, value)
        return mapped

    def _log_sql_error(self, procedure_name: str, error: DatabaseError) -> None:
        logger.error(
            "Error executing SQL: %s. Error Code: %s, Message: %s",
            procedure_name,
            error.code,
            error.message,
            exc_info=error,
        )


def _total_rows_affected(rowcounts: List[Optional[int]]) -> Optional[int]:
    """Sum the non-negative counts of every statement."""

    if all(count is None for count in rowcounts):
        return None
    counts = [int(count) for count in rowcounts if count is not None and count >= 0]
    if not counts:
        return -1
    return sum(counts)
