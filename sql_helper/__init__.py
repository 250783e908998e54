"""Stored procedure helper for SQL Server.

Executes stored procedures with scalar and table-valued parameters, maps
result rows onto dataclass records, and exposes the user repository.
"""

from .core import (
    DEFAULT_COMMAND_TIMEOUT,
    USER_TABLE_COLUMNS,
    DatabaseError,
    DatabaseManagerPort,
    DbParameter,
    DbParameterName,
    MappingError,
    RecordMapping,
    Repository,
    SqlConfigOption,
    SqlType,
    StoredProcedure,
    StructuredRow,
    TableTypeColumn,
    UserDefinedTableType,
    UserRepositoryPort,
    UserTableType,
    record_mapping,
    row_to_record,
    user_parameters,
)
from .ports import AsyncDatabaseManager, PyodbcConnector, SqlServerDialect, translate_driver_error

__all__ = [
    "AsyncDatabaseManager",
    "PyodbcConnector",
    "SqlServerDialect",
    "translate_driver_error",
    "DEFAULT_COMMAND_TIMEOUT",
    "SqlConfigOption",
    "DbParameterName",
    "StoredProcedure",
    "UserDefinedTableType",
    "DatabaseManagerPort",
    "UserRepositoryPort",
    "DatabaseError",
    "MappingError",
    "DbParameter",
    "SqlType",
    "StructuredRow",
    "TableTypeColumn",
    "RecordMapping",
    "record_mapping",
    "row_to_record",
    "USER_TABLE_COLUMNS",
    "Repository",
    "UserTableType",
    "user_parameters",
]
