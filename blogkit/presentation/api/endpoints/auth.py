"""Login and identity endpoints."""

from fastapi import APIRouter, Depends

from blogkit.application.interfaces import AuthService
from blogkit.application.schemas import (
    LoginRequestSchema,
    LoginResponseSchema,
    UserInfoResponse,
)
from blogkit.domain.entities import LoginRequest, UserInfo
from blogkit.domain.exceptions import AuthenticationError
from blogkit.infrastructure.dependencies import get_auth_service
from blogkit.presentation.api.security import get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponseSchema)
async def login(
    data: LoginRequestSchema,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponseSchema:
    """Exchange credentials for a bearer token."""
    result = await service.authenticate(
        LoginRequest(username=data.username, password=data.password)
    )
    if result is None:
        raise AuthenticationError("Invalid username or password")
    return LoginResponseSchema(
        token=result.token,
        user_info=UserInfoResponse.model_validate(result.user_info),
    )


@router.get("/admin-check", response_model=bool)
async def admin_check(user: UserInfo = Depends(get_current_user)) -> bool:
    """Whether the bearer of the token is an admin."""
    return user.is_admin
