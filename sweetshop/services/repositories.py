"""SQLAlchemy Repositories — shell implementations of core/repository_protocols.py.

Invariants:
    - One repository per request-scoped AsyncSession; no cross-request caching
    - get_for_update issues SELECT ... FOR UPDATE and refreshes identity-map state
    - Search filters combine with AND; text filters are case-insensitive substrings
    - A unique-constraint violation on user insert surfaces as DuplicateResourceError

Design Decisions:
    - populate_existing on locked reads: after a rollback/retry the instance must
      reflect the committed row, not the stale identity-map copy
"""

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sweetshop.core.domain_types import SweetId
from sweetshop.core.errors import DuplicateResourceError
from sweetshop.core.search_criteria import SearchCriteria
from sweetshop.models.sweet import Sweet
from sweetshop.models.user import User


def _contains(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


class SqlSweetRepository:
    """Catalog persistence backed by the `sweets` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, fields: dict) -> Sweet:
        sweet = Sweet(**fields)
        self.db.add(sweet)
        await self.db.flush()
        return sweet

    async def get(self, sweet_id: SweetId) -> Sweet | None:
        result = await self.db.execute(
            select(Sweet).where(Sweet.id == sweet_id),
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, sweet_id: SweetId) -> Sweet | None:
        result = await self.db.execute(
            select(Sweet)
            .where(Sweet.id == sweet_id)
            .with_for_update()
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Sweet]:
        result = await self.db.execute(
            select(Sweet).order_by(Sweet.name, Sweet.id),
        )
        return list(result.scalars().all())

    async def search(self, criteria: SearchCriteria) -> list[Sweet]:
        query = select(Sweet)
        if criteria.name:
            query = query.where(
                Sweet.name.ilike(_contains(criteria.name), escape="\\"),
            )
        if criteria.category:
            query = query.where(
                Sweet.category.ilike(_contains(criteria.category), escape="\\"),
            )
        if criteria.query:
            pattern = _contains(criteria.query)
            query = query.where(or_(
                Sweet.name.ilike(pattern, escape="\\"),
                Sweet.category.ilike(pattern, escape="\\"),
            ))
        if criteria.min_price is not None:
            query = query.where(Sweet.price >= criteria.min_price)
        if criteria.max_price is not None:
            query = query.where(Sweet.price <= criteria.max_price)
        result = await self.db.execute(query.order_by(Sweet.name, Sweet.id))
        return list(result.scalars().all())

    async def delete(self, sweet: Sweet) -> None:
        await self.db.delete(sweet)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()


class SqlUserRepository:
    """Account persistence backed by the `users` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def exists_username(self, username: str) -> bool:
        return await self.get_by_username(username) is not None

    async def exists_email(self, email: str) -> bool:
        result = await self.db.execute(
            select(User.id).where(User.email == email),
        )
        return result.first() is not None

    async def add(
        self, username: str, email: str, password_hash: str, roles: list[str],
    ) -> User:
        user = User(
            username=username, email=email,
            password_hash=password_hash, roles=roles,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            await self.db.rollback()
            field = "email" if "email" in str(e.orig).lower() else "username"
            raise DuplicateResourceError(field)
        await self.db.refresh(user)
        return user
