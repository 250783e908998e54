"""Public core API for parameters, record mapping, and the user repository."""

from .config import DEFAULT_COMMAND_TIMEOUT, SqlConfigOption
from .constants import DbParameterName, StoredProcedure, UserDefinedTableType
from .contracts import DatabaseManagerPort, UserRepositoryPort
from .errors import DatabaseError, MappingError
from .parameters import DbParameter, SqlType, StructuredRow, TableTypeColumn
from .records import RecordMapping, record_mapping, row_to_record
from .repository import USER_TABLE_COLUMNS, Repository, UserTableType, user_parameters

__all__ = [
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
