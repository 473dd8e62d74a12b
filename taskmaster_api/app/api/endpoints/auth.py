"""
Authentication endpoints.

Both routes accept ``{"username", "password"}`` and answer with
``{"success", "token", "user"}``.  Login is affected by
``KNOWN_DEFECT_LOGIN_COMPARISON`` (see ``UserService.login``) and
rejects valid credentials until the defect is hotfixed.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from taskmaster_api.app.api.deps import get_user_service
from taskmaster_api.app.schemas.user import AuthResponse, UserCredentials, UserRead
from taskmaster_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/login", response_model=AuthResponse)
async def login_user(
    credentials: Optional[UserCredentials] = None,
    service: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Authenticate a user and return a bearer token."""
    credentials = credentials or UserCredentials()
    user, token = await service.login(credentials.username, credentials.password)
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    credentials: Optional[UserCredentials] = None,
    service: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Register a new user and log them straight in.

    Responds with 409 when the username is taken.  The password is
    never echoed back.
    """
    credentials = credentials or UserCredentials()
    user, token = await service.register(credentials.username, credentials.password)
    return AuthResponse(token=token, user=UserRead.model_validate(user))
