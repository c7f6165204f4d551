"""
DevConnector Backend: User Service
===================================

What:  Registration, login and "who am I" for accounts.
Who:   Called by the /api/users and /api/auth route handlers.

Registration Flow (POST /api/users):
    ┌───────────┐   ┌──────────────┐   ┌────────────┐   ┌────────────┐
    │  Email    │──▶│  Derive      │──▶│  Hash      │──▶│  Store &   │
    │  unique?  │   │  avatar      │   │  password  │   │  sign token│
    └───────────┘   └──────────────┘   └────────────┘   └────────────┘

Credential errors:
    Unknown email and wrong password both answer "Invalid credentials" so
    the login endpoint cannot be used to discover registered addresses.
"""

import logging

from devconnector.config import Settings
from devconnector.exceptions import DuplicateError, NotFoundError, ValidationError
from devconnector.repositories import UserRepository
from devconnector.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from devconnector.security import (
    UserIdentity,
    gravatar_url,
    hash_password,
    issue_token,
    verify_password,
)

logger = logging.getLogger(__name__)


class UserService:
    """Account operations on top of the user repository."""

    def __init__(self, users: UserRepository, settings: Settings):
        self.users = users
        self.settings = settings

    async def register(self, request: RegisterRequest) -> TokenResponse:
        """
        Create an account and sign its first token.

        Raises:
            DuplicateError: the email is already registered (→ 400)
        """
        if await self.users.email_exists(request.email):
            raise DuplicateError(message="User already exists", param="email")

        password_hash = hash_password(request.password)
        user = await self.users.create(
            name=request.name.strip(),
            email=request.email,
            avatar=gravatar_url(request.email),
            password=password_hash,
        )
        logger.info("Registered user %s", user.id)

        return TokenResponse(token=issue_token(str(user.id), self.settings))

    async def authenticate(self, request: LoginRequest) -> TokenResponse:
        """
        Check credentials and sign a token.

        Raises:
            ValidationError: unknown email or wrong password (→ 400)
        """
        user = await self.users.find_by_email(request.email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise ValidationError(message="Invalid credentials")

        matches = verify_password(request.password, user.password)
        if not matches:
            logger.info("Login failed: wrong password for user %s", user.id)
            raise ValidationError(message="Invalid credentials")

        return TokenResponse(token=issue_token(str(user.id), self.settings))

    async def get_current(self, identity: UserIdentity) -> UserResponse:
        user = await self.users.find_by_id(identity.id)
        if user is None:
            raise NotFoundError(message="User not found")
        return UserResponse.model_validate(user)
