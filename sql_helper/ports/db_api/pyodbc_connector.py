"""pyodbc connection factory and driver error translation."""

from __future__ import annotations

import importlib
import re
from typing import Any, Optional

from ...core.errors import DatabaseError

_NATIVE_ERROR_RE = re.compile(r"\((\d+)\)")


class PyodbcConnector:
    """Open SQL Server connections through pyodbc.

    The driver module is imported on first use so that importing this
    package does not require an ODBC driver manager.
    """

    def __init__(self, *, autocommit: bool = True, **connect_kwargs: Any):
        self._autocommit = autocommit
        self._connect_kwargs = connect_kwargs
        self._module: Any = None

    @property
    def module(self) -> Any:
        if self._module is None:
            self._module = importlib.import_module("pyodbc")
        return self._module

    def __call__(self, connection_string: str) -> Any:
        return self.module.connect(
            connection_string,
            autocommit=self._autocommit,
            **self._connect_kwargs,
        )


def translate_driver_error(exc: BaseException) -> Optional[DatabaseError]:
    """Return the `DatabaseError` describing `exc`, or None for non-database errors.

    pyodbc errors carry `(sqlstate, message)` in `args`, with the native
    server error number embedded in the message as `(2812)`.
    """

    if isinstance(exc, DatabaseError):
        return exc
    if not _is_pyodbc_error(exc):
        return None

    args = getattr(exc, "args", ())
    sqlstate: Optional[str] = None
    message = str(exc)
    if len(args) >= 2:
        sqlstate = str(args[0])
        message = str(args[1])
    elif len(args) == 1:
        message = str(args[0])

    # Last parenthesised integer; earlier ones can be message values.
    numbers = _NATIVE_ERROR_RE.findall(message)
    code: int | str
    if numbers:
        code = int(numbers[-1])
    else:
        code = sqlstate or 0
    return DatabaseError(code, message, sqlstate=sqlstate)


def _is_pyodbc_error(exc: BaseException) -> bool:
    for cls in type(exc).__mro__:
        module_name = getattr(cls, "__module__", "") or ""
        if module_name == "pyodbc" or module_name.startswith("pyodbc."):
            return True
    return False
