"""
DevConnector Backend: User & Auth Routes
=========================================

    POST /api/users   register            (public)
    POST /api/auth    login               (public)
    GET  /api/auth    current user        (token)
"""

from fastapi import APIRouter, Depends

from devconnector.dependencies import get_current_identity, get_user_service
from devconnector.schemas.common import ErrorResponse
from devconnector.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from devconnector.security import UserIdentity
from devconnector.services import UserService

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    response_model=TokenResponse,
    responses={400: {"description": "Invalid input or email taken", "model": ErrorResponse}},
    summary="Register a user",
)
async def register(
    body: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    return await service.register(body)


@router.post(
    "/auth",
    response_model=TokenResponse,
    responses={400: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Authenticate a user and get a token",
)
async def login(
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    return await service.authenticate(body)


@router.get(
    "/auth",
    response_model=UserResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Get the authenticated user",
)
async def current_user(
    identity: UserIdentity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.get_current(identity)
