"""Public port exports for concrete adapter implementations."""

from .db_api import AsyncDatabaseManager, PyodbcConnector, SqlServerDialect, translate_driver_error

__all__ = [
    "AsyncDatabaseManager",
    "PyodbcConnector",
    "SqlServerDialect",
    "translate_driver_error",
]
