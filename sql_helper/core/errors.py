"""Error types raised by the database manager and record mapping."""

from __future__ import annotations

from typing import Optional


class DatabaseError(Exception):
    """Failure reported by the database client.

    Attributes:
        code: Native server error number (or SQLSTATE when no number is known).
        message: Server error message.
        sqlstate: ODBC SQLSTATE when the driver reported one.
    """

    def __init__(self, code: int | str, message: str, sqlstate: Optional[str] = None):
        super().__init__(code, message)
        self.code = code
        self.message = message
        self.sqlstate = sqlstate

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class MappingError(TypeError):
    """Raised when a record type cannot be used as a row mapping target."""
