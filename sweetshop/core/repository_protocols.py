"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the pure adjustment logic
      that the service runs between these calls is never async
"""

from decimal import Decimal
from typing import Any, Protocol

from sweetshop.core.domain_types import SweetId
from sweetshop.core.search_criteria import SearchCriteria


class SweetLike(Protocol):
    """Structural contract for catalog entries handed across the boundary."""
    id: Any
    name: str
    category: str
    price: Decimal
    quantity: int
    description: str | None


class SweetRepository(Protocol):
    """Contract for catalog persistence — implemented by shell."""
    async def add(self, fields: dict) -> SweetLike: ...
    async def get(self, sweet_id: SweetId) -> SweetLike | None: ...
    async def get_for_update(self, sweet_id: SweetId) -> SweetLike | None: ...
    async def list_all(self) -> list[SweetLike]: ...
    async def search(self, criteria: SearchCriteria) -> list[SweetLike]: ...
    async def delete(self, sweet: SweetLike) -> None: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def get_by_username(self, username: str) -> Any | None: ...
    async def exists_username(self, username: str) -> bool: ...
    async def exists_email(self, email: str) -> bool: ...
    async def add(
        self, username: str, email: str, password_hash: str, roles: list[str],
    ) -> Any: ...
