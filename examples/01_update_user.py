"""Update users through the `UPDATE_USER` stored procedure.

Requires pyodbc, an ODBC driver for SQL Server, and `SQL_CONNECTION_STRING`
pointing at a database that defines `UPDATE_USER` and `[dbo].[USER_TABLE_TYPE]`.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import uuid
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sql_helper").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sql_helper import AsyncDatabaseManager, Repository, SqlConfigOption, UserTableType


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    # 1) Load connection settings and build the manager.
    manager = AsyncDatabaseManager(SqlConfigOption.from_environment())
    repo = Repository(manager)

    # 2) Send every user in one table-valued parameter.
    users = [
        UserTableType(uuid.uuid4(), "Ada", "Lovelace", "ada@example.com"),
        UserTableType(uuid.uuid4(), "Grace", "Hopper", "grace@example.com"),
    ]
    print("Updated:", await repo.update_user(users))


if __name__ == "__main__":
    asyncio.run(main())
