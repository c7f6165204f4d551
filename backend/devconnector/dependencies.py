"""
DevConnector Backend: Request Dependencies
===========================================

What:  FastAPI dependencies that hand route handlers their collaborators.
How:   `create_app()` stores settings and the services built on top of the
       repositories in `app.state`; these functions read them back per
       request. There is no module-level database or service singleton.

Identity Verifier:
    `get_current_identity` is the auth gate. Routes that require a user
    declare `identity: UserIdentity = Depends(get_current_identity)`; it
    runs before the handler body, and a missing or bad token wins over
    field validation errors (401 before 400). A body that is not valid JSON
    is rejected while FastAPI reads it, before any dependency runs, so that
    case answers 400 "JSON decode error" even without a token.
"""

from fastapi import Request

from devconnector.config import Settings
from devconnector.security import UserIdentity, verify_token
from devconnector.services import PostService, ProfileService, UserService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.profile_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


async def get_current_identity(request: Request) -> UserIdentity:
    """
    Verify the request token and return the caller's identity.

    Raises:
        UnauthenticatedError: header missing or token unverifiable (→ 401)
    """
    settings = get_settings(request)
    token = request.headers.get(settings.auth_header)
    return verify_token(token, settings)
