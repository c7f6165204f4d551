"""
DevConnector Backend: Profile Routes
=====================================

What:  /api/profile endpoints.

Route Inventory:
    GET    /api/profile/me                            own profile      (token)
    POST   /api/profile                               create/update    (token)
    GET    /api/profile                               all profiles     (public)
    GET    /api/profile/user/{user_id}                one profile      (public)
    DELETE /api/profile                               delete account   (token)
    PUT    /api/profile/experience                    add experience   (token)
    DELETE /api/profile/experience/{experience_id}    drop experience  (token)

Path ids are plain strings: an id that is not a UUID is simply "not found"
(404), never a 422.
"""

from typing import List

from fastapi import APIRouter, Depends

from devconnector.dependencies import get_current_identity, get_profile_service
from devconnector.schemas.common import ErrorResponse, MessageResponse
from devconnector.schemas.profile import ExperienceRequest, ProfileRequest, ProfileResponse
from devconnector.security import UserIdentity
from devconnector.services import ProfileService

router = APIRouter(prefix="/api/profile", tags=["Profile"])

_AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}


@router.get(
    "/me",
    response_model=ProfileResponse,
    responses={**_AUTH_ERRORS, 404: {"description": "No profile yet", "model": ErrorResponse}},
    summary="Get the authenticated user's profile",
)
async def get_my_profile(
    identity: UserIdentity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.get_mine(identity)


@router.post(
    "",
    response_model=ProfileResponse,
    responses={**_AUTH_ERRORS, 400: {"description": "Invalid input", "model": ErrorResponse}},
    summary="Create or update the authenticated user's profile",
)
async def upsert_profile(
    body: ProfileRequest,
    identity: UserIdentity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.upsert(identity, body)


@router.get("", response_model=List[ProfileResponse], summary="List all profiles")
async def list_profiles(
    service: ProfileService = Depends(get_profile_service),
) -> List[ProfileResponse]:
    return await service.list_all()


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    responses={404: {"description": "Profile not found", "model": ErrorResponse}},
    summary="Get a profile by user id",
)
async def get_profile_by_user(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.get_by_user(user_id)


@router.delete(
    "",
    response_model=MessageResponse,
    responses=_AUTH_ERRORS,
    summary="Delete the authenticated user, their profile and their posts",
)
async def delete_account(
    identity: UserIdentity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    return await service.delete_account(identity)


@router.put(
    "/experience",
    response_model=ProfileResponse,
    responses={
        **_AUTH_ERRORS,
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "No profile found", "model": ErrorResponse},
    },
    summary="Add an experience entry",
)
async def add_experience(
    body: ExperienceRequest,
    identity: UserIdentity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.add_experience(identity, body)


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileResponse,
    responses={**_AUTH_ERRORS, 404: {"description": "No profile found", "model": ErrorResponse}},
    summary="Remove an experience entry",
)
async def remove_experience(
    experience_id: str,
    identity: UserIdentity = Depends(get_current_identity),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await service.remove_experience(identity, experience_id)
