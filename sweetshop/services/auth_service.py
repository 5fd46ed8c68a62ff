"""Auth Service — registration, login and admin bootstrap.

Invariants:
    - New accounts get roles ["USER"]; only bootstrap creates ADMIN
    - Login failure is uniform: unknown user and wrong password both raise AuthenticationError
    - Email defaults to <username>@sweetshop.com when omitted
"""

import logging

from sweetshop.core.domain_types import Role
from sweetshop.core.errors import AuthenticationError, DuplicateResourceError
from sweetshop.core.repository_protocols import UserRepository
from sweetshop.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from sweetshop.schemas.auth import AuthResponse

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_DOMAIN = "sweetshop.com"


class AuthService:
    """Issues tokens for registered users."""

    def __init__(
        self,
        users: UserRepository,
        secret_key: str,
        algorithm: str = "HS256",
        expires_minutes: int = 60,
    ):
        self.users = users
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    async def register(
        self, username: str, password: str, email: str | None = None,
    ) -> AuthResponse:
        if await self.users.exists_username(username):
            raise DuplicateResourceError("username")
        email = email or f"{username}@{DEFAULT_EMAIL_DOMAIN}"
        if await self.users.exists_email(email):
            raise DuplicateResourceError("email")

        user = await self.users.add(
            username=username,
            email=email,
            password_hash=hash_password(password),
            roles=[Role.USER.value],
        )
        logger.info("User registered", extra={"username": username})
        return self._issue(user)

    async def login(self, username: str, password: str) -> AuthResponse:
        user = await self.users.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login failed", extra={"username": username})
            raise AuthenticationError()
        return self._issue(user)

    async def ensure_admin(self, username: str, password: str) -> None:
        """Create the configured admin account if it does not exist yet."""
        if await self.users.exists_username(username):
            return
        await self.users.add(
            username=username,
            email=f"{username}@{DEFAULT_EMAIL_DOMAIN}",
            password_hash=hash_password(password),
            roles=[Role.USER.value, Role.ADMIN.value],
        )
        logger.info("Bootstrap admin created", extra={"username": username})

    def _issue(self, user) -> AuthResponse:
        token = create_access_token(
            user.username, user.roles, self.secret_key,
            algorithm=self.algorithm, expires_minutes=self.expires_minutes,
        )
        return AuthResponse(
            token=token, username=user.username,
            email=user.email, roles=list(user.roles),
        )
