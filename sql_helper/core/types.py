"""Shared core type aliases used across contracts, manager, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

NamedParams = Dict[str, Any]
ScalarParams = Optional[Mapping[str, Any]]

RowMapping = Mapping[str, Any]
Rows = List[RowMapping]
