"""Connection settings supplied by the hosting environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_COMMAND_TIMEOUT = 30


@dataclass(frozen=True)
class SqlConfigOption:
    """SQL Server connection configuration.

    Attributes:
        connection_string: ODBC connection string, passed to the driver as is.
        command_timeout: Command timeout in seconds.
    """

    connection_string: str
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT

    @classmethod
    def from_environment(cls) -> "SqlConfigOption":
        """Create configuration from environment variables."""
        connection_string = os.getenv("SQL_CONNECTION_STRING")
        if not connection_string:
            raise ValueError("SQL_CONNECTION_STRING is not set.")
        return cls(
            connection_string=connection_string,
            command_timeout=int(
                os.getenv("SQL_COMMAND_TIMEOUT", str(DEFAULT_COMMAND_TIMEOUT))
            ),
        )

    @classmethod
    def from_mapping(cls, section: Mapping[str, Any]) -> "SqlConfigOption":
        """Create configuration from an `appsettings`-style section.

        Expects `ConnectionString` and optionally `CommandTimeout`.
        """
        if "ConnectionString" not in section:
            raise ValueError("Configuration section has no 'ConnectionString'.")
        return cls(
            connection_string=str(section["ConnectionString"]),
            command_timeout=int(section.get("CommandTimeout", DEFAULT_COMMAND_TIMEOUT)),
        )
