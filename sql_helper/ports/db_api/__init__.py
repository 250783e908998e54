"""DB-API adapter, SQL Server dialect, and pyodbc connector exports."""

from .database_manager import AsyncDatabaseManager
from .dialects import SqlServerDialect
from .pyodbc_connector import PyodbcConnector, translate_driver_error

__all__ = [
    "AsyncDatabaseManager",
    "PyodbcConnector",
    "SqlServerDialect",
    "translate_driver_error",
]
