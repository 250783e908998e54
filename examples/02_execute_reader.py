"""Map stored procedure results onto dataclass records.

Assumes a `GET_USERS_BY_DOMAIN` procedure taking `@Domain` and returning
`Id`, `FirstName`, `Email` columns.
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sql_helper").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sql_helper import AsyncDatabaseManager, SqlConfigOption


@dataclass
class UserSummary:
    # Fields default so every column may be absent or NULL.
    id: Optional[str] = None
    first_name: str = ""
    email: str = ""

    __columns__ = {"id": "Id", "first_name": "FirstName", "email": "Email"}


async def main() -> None:
    manager = AsyncDatabaseManager(SqlConfigOption.from_environment())

    # 1) Materialize the whole result set.
    users = await manager.execute_reader(
        UserSummary, "GET_USERS_BY_DOMAIN", {"Domain": "example.com"}
    )
    print("Users:", users)

    # 2) Or stream rows while the connection stays open.
    async for user in manager.stream_reader(
        UserSummary, "GET_USERS_BY_DOMAIN", {"Domain": "example.com"}
    ):
        print("Streamed:", user.email)


if __name__ == "__main__":
    asyncio.run(main())
