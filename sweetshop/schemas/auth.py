"""Auth Schemas — registration, login and token payloads."""

from pydantic import BaseModel, Field, field_validator


class RegisterRequest(BaseModel):
    """Registration — email optional, derived from username when absent."""
    username: str = Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(min_length=6, max_length=72)
    email: str | None = Field(
        None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
    )

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return v.lower() if v else v


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=72)


class AuthResponse(BaseModel):
    """Token plus the identity it was issued for."""
    token: str
    token_type: str = "Bearer"
    username: str
    email: str
    roles: list[str]
