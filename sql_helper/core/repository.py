"""User repository backed by the `UPDATE_USER` stored procedure."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .constants import DbParameterName, StoredProcedure, UserDefinedTableType
from .contracts import DatabaseManagerPort
from .parameters import DbParameter, SqlType, StructuredRow, TableTypeColumn

logger = logging.getLogger(__name__)


@dataclass
class UserTableType:
    """One row of `[dbo].[USER_TABLE_TYPE]`."""

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str


USER_TABLE_COLUMNS: Tuple[TableTypeColumn, ...] = (
    TableTypeColumn(DbParameterName.ID, SqlType.UNIQUEIDENTIFIER),
    TableTypeColumn(DbParameterName.FIRST_NAME, SqlType.NVARCHAR),
    TableTypeColumn(DbParameterName.LAST_NAME, SqlType.NVARCHAR),
    TableTypeColumn(DbParameterName.EMAIL, SqlType.VARCHAR),
)


class Repository:
    """User data operations executed through a database manager."""

    def __init__(self, database_manager: DatabaseManagerPort):
        self.database_manager = database_manager

    async def update_user(self, records: Iterable[UserTableType]) -> bool:
        """Send all `records` to `UPDATE_USER` as one table-valued parameter.

        Returns:
            True when the manager reported an affected-row count (zero
            included), False when it reported none.

        Raises:
            DatabaseError: Propagated from the manager.
        """

        parameters = user_parameters(records)
        logger.debug(
            "Updating %d user rows via %s",
            len(parameters[0].value),
            StoredProcedure.UPDATE_USER,
        )
        rows_affected = await self.database_manager.execute_non_query(
            StoredProcedure.UPDATE_USER, parameters
        )
        return rows_affected is not None


def user_parameters(records: Iterable[UserTableType]) -> List[DbParameter]:
    """Build the single `@UserData` parameter for `UPDATE_USER`."""

    return [
        DbParameter.create(
            DbParameterName.USER_DATA,
            user_rows(records),
            UserDefinedTableType.USER_TABLE_TYPE,
        )
    ]


def user_rows(records: Iterable[UserTableType]) -> List[StructuredRow]:
    return [
        StructuredRow(
            USER_TABLE_COLUMNS,
            (item.id, item.first_name, item.last_name, item.email),
        )
        for item in records
    ]
