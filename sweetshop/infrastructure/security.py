"""Security Primitives — bcrypt password hashing and JWT access tokens.

Invariants:
    - Plaintext passwords never stored or logged
    - Token claims: sub (username), roles, iat, exp
    - Every decode failure (bad signature, expired, malformed) surfaces as AuthenticationError

Design Decisions:
    - bcrypt and PyJWT used directly: no framework coupling, two small dependencies
"""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from sweetshop.core.errors import AuthenticationError


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8"),
        )
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(
    username: str,
    roles: list[str],
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60,
    now: datetime | None = None,
) -> str:
    """Issue a signed access token for `username`."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": username,
        "roles": list(roles),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str, secret_key: str, algorithm: str = "HS256",
) -> dict:
    """Verify signature and expiry; return the claims."""
    try:
        claims = jwt.decode(
            token, secret_key, algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")
    return claims
