"""Shared type aliases used across the package."""
from __future__ import annotations

from typing import Any, Mapping, TypeAlias

OperationName: TypeAlias = str
PositionalArgs: TypeAlias = tuple[Any, ...]
KeywordArgs: TypeAlias = dict[str, Any]
FrozenKeywordArgs: TypeAlias = Mapping[str, Any]  # read-only view of KeywordArgs
