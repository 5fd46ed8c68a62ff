"""API Dependencies — authentication, role gates and service wiring.

Invariants:
    - Missing/invalid bearer token → AuthenticationError (401), never a bare HTTPException
    - Role checks run after authentication → PermissionDeniedError (403)
    - Services share the request's AsyncSession (FastAPI caches get_db per request)
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from sweetshop.config import get_settings
from sweetshop.core.domain_types import Role
from sweetshop.core.errors import AuthenticationError, PermissionDeniedError
from sweetshop.infrastructure.database import get_db
from sweetshop.infrastructure.security import decode_access_token
from sweetshop.models.user import User
from sweetshop.services.auth_service import AuthService
from sweetshop.services.repositories import SqlSweetRepository, SqlUserRepository
from sweetshop.services.sweet_service import SweetService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token to a persisted user."""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    settings = get_settings()
    claims = decode_access_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm,
    )
    user = await SqlUserRepository(db).get_by_username(claims["sub"])
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


def require_role(role: Role):
    """Build a dependency that admits only users holding `role`."""
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not user.has_role(role.value):
            raise PermissionDeniedError(role.value)
        return user
    return dependency


require_admin = require_role(Role.ADMIN)


def get_sweet_service(db: AsyncSession = Depends(get_db)) -> SweetService:
    return SweetService(
        SqlSweetRepository(db),
        max_attempts=get_settings().adjustment_max_attempts,
    )


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    settings = get_settings()
    return AuthService(
        SqlUserRepository(db),
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expiration_minutes,
    )
