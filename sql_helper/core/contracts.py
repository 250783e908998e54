"""Core port contracts used by the repository and database manager."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, AsyncIterator, Iterable, List, Optional, Protocol, Type, TypeVar

from .parameters import DbParameter
from .types import ScalarParams

if TYPE_CHECKING:
    from .repository import UserTableType

T = TypeVar("T")


class DatabaseManagerPort(Protocol):
    """Stored procedure execution behavior required by repositories."""

    async def execute_non_query(
        self,
        procedure_name: str,
        parameters: Optional[Iterable[DbParameter]] = None,
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> Optional[int]: ...

    async def execute_reader(
        self,
        record_type: Type[T],
        procedure_name: str,
        parameters: ScalarParams = None,
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> List[T]: ...

    def stream_reader(
        self,
        record_type: Type[T],
        procedure_name: str,
        parameters: ScalarParams = None,
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> AsyncIterator[T]: ...


class UserRepositoryPort(Protocol):
    """User data operations exposed to application code."""

    async def update_user(self, records: Iterable[UserTableType]) -> bool: ...
