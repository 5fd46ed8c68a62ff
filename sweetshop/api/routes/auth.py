"""Auth Routes — registration and login.

Invariants:
    - Both endpoints unauthenticated
    - Responses carry the token plus username, email, roles
"""

from fastapi import APIRouter, Depends, status

from sweetshop.api.dependencies import get_auth_service
from sweetshop.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from sweetshop.schemas.common import ApiResponse
from sweetshop.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, service: AuthService = Depends(get_auth_service),
):
    auth = await service.register(body.username, body.password, body.email)
    return ApiResponse[AuthResponse](
        message="User registered successfully", data=auth,
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    body: LoginRequest, service: AuthService = Depends(get_auth_service),
):
    auth = await service.login(body.username, body.password)
    return ApiResponse[AuthResponse](message="Login successful", data=auth)
