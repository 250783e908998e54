"""Fixed names shared with the server-side schema."""

from __future__ import annotations


class DbParameterName:
    ID = "@Id"
    FIRST_NAME = "@FirstName"
    LAST_NAME = "@LastName"
    EMAIL = "@Email"
    USER_DATA = "@UserData"


class UserDefinedTableType:
    USER_TABLE_TYPE = "[dbo].[USER_TABLE_TYPE]"


class StoredProcedure:
    UPDATE_USER = "UPDATE_USER"
