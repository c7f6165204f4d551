"""
DevConnector Backend: Credentials & Identity Verification
==========================================================

What:  Password hashing, access-token issuance, and the identity verifier
       that turns a request token into a `UserIdentity`.
How:   passlib's bcrypt CryptContext for passwords, PyJWT (HS256) for tokens.

Token format:
    header.payload.signature with payload
        {"user": {"id": "<user uuid>"}, "iat": ..., "exp": ...}

Verification outcomes:
    no token                 → UnauthenticatedError("No token, authorization denied")
    expired / bad signature /
    malformed / no user.id   → UnauthenticatedError("Token is not valid")
    valid                    → UserIdentity(id=...)

    The verifier never touches the database: the signed claim is trusted.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from devconnector.config import Settings
from devconnector.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar/"


@dataclass(frozen=True)
class UserIdentity:
    """The authenticated caller, as asserted by a verified token."""
    id: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Gravatar avatar URL for an email (md5 of the trimmed, lowercased address)."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE_URL}{digest}?s={size}&r={rating}&d={default}"


def issue_token(user_id: str, settings: Settings, now: Optional[datetime] = None) -> str:
    """Sign an access token carrying the user-id claim."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "user": {"id": str(user_id)},
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=settings.jwt_expires_in),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: Optional[str], settings: Settings) -> UserIdentity:
    """
    Resolve a request token to the caller's identity.

    Raises:
        UnauthenticatedError: token absent, or present but unverifiable
    """
    if not token:
        raise UnauthenticatedError(param=settings.auth_header)

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.info("Token rejected: %s", type(e).__name__)
        raise UnauthenticatedError(
            message="Token is not valid",
            param=settings.auth_header,
            context={"reason": type(e).__name__},
        )

    user = payload.get("user")
    user_id = user.get("id") if isinstance(user, dict) else None
    if not isinstance(user_id, str) or not user_id:
        logger.info("Token rejected: missing user id claim")
        raise UnauthenticatedError(
            message="Token is not valid",
            param=settings.auth_header,
            context={"reason": "missing_claim"},
        )

    return UserIdentity(id=user_id)
