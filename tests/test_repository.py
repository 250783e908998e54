from __future__ import annotations

import unittest
import uuid
from typing import Any, List, Optional

from sql_helper import (
    USER_TABLE_COLUMNS,
    AsyncDatabaseManager,
    DatabaseError,
    Repository,
    SqlConfigOption,
    SqlType,
    StructuredRow,
    UserTableType,
)
from tests.db_test_helpers import FakeConnect, FakeConnection


class _RecordingManager:
    def __init__(self, result: Optional[int] = 1, error: Optional[BaseException] = None):
        self.result = result
        self.error = error
        self.calls: List[Any] = []

    async def execute_non_query(self, procedure_name, parameters=None, *, cancellation=None):
        self.calls.append((procedure_name, list(parameters or [])))
        if self.error is not None:
            raise self.error
        return self.result

    async def execute_reader(self, record_type, procedure_name, parameters=None, *, cancellation=None):
        raise AssertionError("not used")

    def stream_reader(self, record_type, procedure_name, parameters=None, *, cancellation=None):
        raise AssertionError("not used")


def _users(count: int) -> List[UserTableType]:
    return [
        UserTableType(
            id=uuid.uuid4(),
            first_name=f"First{i}",
            last_name=f"Last{i}",
            email=f"user{i}@example.com",
        )
        for i in range(count)
    ]


class RepositoryTests(unittest.IsolatedAsyncioTestCase):
    async def test_update_user_sends_one_structured_parameter(self) -> None:
        manager = _RecordingManager(result=3)
        users = _users(3)

        result = await Repository(manager).update_user(users)

        self.assertTrue(result)
        self.assertEqual(len(manager.calls), 1)
        procedure_name, parameters = manager.calls[0]
        self.assertEqual(procedure_name, "UPDATE_USER")
        self.assertEqual(len(parameters), 1)
        param = parameters[0]
        self.assertEqual(param.name, "@UserData")
        self.assertEqual(param.type_name, "[dbo].[USER_TABLE_TYPE]")
        self.assertTrue(param.is_structured)
        self.assertEqual(len(param.value), len(users))
        for row, user in zip(param.value, users):
            self.assertIsInstance(row, StructuredRow)
            self.assertEqual(row.values, (user.id, user.first_name, user.last_name, user.email))

    async def test_user_rows_use_fixed_column_layout(self) -> None:
        manager = _RecordingManager()
        await Repository(manager).update_user(_users(1))

        row = manager.calls[0][1][0].value[0]
        self.assertIs(row.columns, USER_TABLE_COLUMNS)
        self.assertEqual(
            [(column.name, column.sql_type) for column in row.columns],
            [
                ("@Id", SqlType.UNIQUEIDENTIFIER),
                ("@FirstName", SqlType.NVARCHAR),
                ("@LastName", SqlType.NVARCHAR),
                ("@Email", SqlType.VARCHAR),
            ],
        )

    async def test_empty_input_still_calls_procedure(self) -> None:
        manager = _RecordingManager(result=0)

        result = await Repository(manager).update_user([])

        self.assertTrue(result)
        _, parameters = manager.calls[0]
        self.assertEqual(len(parameters), 1)
        self.assertEqual(parameters[0].value, [])

    async def test_generator_input_is_accepted(self) -> None:
        manager = _RecordingManager()
        users = _users(2)

        await Repository(manager).update_user(user for user in users)

        self.assertEqual(len(manager.calls[0][1][0].value), 2)

    async def test_missing_row_count_returns_false(self) -> None:
        manager = _RecordingManager(result=None)
        self.assertFalse(await Repository(manager).update_user(_users(1)))

    async def test_database_error_propagates(self) -> None:
        manager = _RecordingManager(error=DatabaseError(50000, "update rejected"))

        with self.assertRaises(DatabaseError):
            await Repository(manager).update_user(_users(1))


class RepositoryWithDatabaseManagerTests(unittest.IsolatedAsyncioTestCase):
    async def test_update_user_executes_table_valued_call(self) -> None:
        conn = FakeConnection(rowcount=1)
        manager = AsyncDatabaseManager(
            SqlConfigOption(connection_string="DSN=fake"),
            connect=FakeConnect(conn),
        )
        user = UserTableType(
            id=uuid.UUID("0f8fad5b-d9cb-469f-a165-70867728950e"),
            first_name="Grace",
            last_name="Hopper",
            email="grace@example.com",
        )

        self.assertTrue(await Repository(manager).update_user([user]))
        self.assertEqual(
            conn.executed,
            [
                (
                    "EXEC [UPDATE_USER] @UserData = ?",
                    [
                        [
                            "USER_TABLE_TYPE",
                            "dbo",
                            (
                                "0f8fad5b-d9cb-469f-a165-70867728950e",
                                "Grace",
                                "Hopper",
                                "grace@example.com",
                            ),
                        ]
                    ],
                )
            ],
        )
        self.assertEqual(conn.timeout, 30)


if __name__ == "__main__":
    unittest.main()
