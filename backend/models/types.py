"""Shared type definitions for type checking.

Uses NewType for IDs and tokens to provide compile-time type safety - prevents
passing a secret token where a user ID is expected.

Uses TypeAlias for types that are purely structural.
"""

from typing import Any, NewType, TypeAlias

# ID types using NewType for type safety
UserID = NewType("UserID", str)
SecretToken = NewType("SecretToken", str)

# Structural aliases using TypeAlias
EmailAddress: TypeAlias = str
Percentage: TypeAlias = float  # 0-100
ShareList: TypeAlias = list[Any]
