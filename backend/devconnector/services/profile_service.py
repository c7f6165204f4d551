"""
DevConnector Backend: Profile Service
======================================

What:  Profile upsert/lookup, experience entries, and account deletion.
Who:   Called by the /api/profile route handlers.

Upsert semantics (POST /api/profile):
    status and skills are always written. Optional text fields and social
    links are written only when the request provides a non-empty value, so
    resubmitting the same form leaves the stored profile unchanged.

Account deletion (DELETE /api/profile):
    posts → profile → user, in that order so no post or profile ever points
    at a missing user. Likes and comments the user left on other people's
    posts are kept; they carry their own name/avatar snapshot.
"""

import logging
import uuid
from typing import Any, Dict, List

from devconnector.exceptions import NotFoundError
from devconnector.repositories import PostRepository, ProfileRepository, UserRepository
from devconnector.schemas.common import MessageResponse
from devconnector.schemas.profile import (
    SOCIAL_NETWORKS,
    ExperienceRequest,
    ProfileRequest,
    ProfileResponse,
)
from devconnector.security import UserIdentity

logger = logging.getLogger(__name__)

OPTIONAL_PROFILE_FIELDS = ("company", "website", "location", "bio", "githubusername")


def build_profile_fields(request: ProfileRequest) -> Dict[str, Any]:
    """Map the flat request body onto stored profile fields."""
    fields: Dict[str, Any] = {
        "status": request.status.strip(),
        "skills": list(request.skills),
    }
    for name in OPTIONAL_PROFILE_FIELDS:
        value = getattr(request, name)
        if value:
            fields[name] = value

    social = {network: getattr(request, network) for network in SOCIAL_NETWORKS if getattr(request, network)}
    if social:
        fields["social"] = social
    return fields


def build_experience_entry(request: ExperienceRequest) -> Dict[str, Any]:
    return {
        "id": str(uuid.uuid4()),
        "title": request.title.strip(),
        "company": request.company.strip(),
        "location": request.location,
        "from": request.from_date.isoformat(),
        "to": request.to.isoformat() if request.to else None,
        "current": request.current,
        "description": request.description,
    }


class ProfileService:
    def __init__(
        self,
        profiles: ProfileRepository,
        users: UserRepository,
        posts: PostRepository,
    ):
        self.profiles = profiles
        self.users = users
        self.posts = posts

    async def get_mine(self, identity: UserIdentity) -> ProfileResponse:
        profile = await self.profiles.find_by_user(identity.id)
        if profile is None:
            raise NotFoundError(message="Profile not found")
        return ProfileResponse.model_validate(profile)

    async def upsert(self, identity: UserIdentity, request: ProfileRequest) -> ProfileResponse:
        """Create the caller's profile, or update the fields they sent."""
        user = await self.users.find_by_id(identity.id)
        if user is None:
            raise NotFoundError(message="User not found")

        profile = await self.profiles.upsert(user.id, build_profile_fields(request))
        return ProfileResponse.model_validate(profile)

    async def list_all(self) -> List[ProfileResponse]:
        profiles = await self.profiles.list_all()
        return [ProfileResponse.model_validate(profile) for profile in profiles]

    async def get_by_user(self, user_id: str) -> ProfileResponse:
        profile = await self.profiles.find_by_user(user_id)
        if profile is None:
            raise NotFoundError(message="Profile not found")
        return ProfileResponse.model_validate(profile)

    async def delete_account(self, identity: UserIdentity) -> MessageResponse:
        removed_posts = await self.posts.delete_by_user(identity.id)
        await self.profiles.delete_by_user(identity.id)
        await self.users.delete(identity.id)
        logger.info("Deleted user %s (%d posts removed)", identity.id, removed_posts)
        return MessageResponse(msg="User deleted")

    async def add_experience(
        self, identity: UserIdentity, request: ExperienceRequest
    ) -> ProfileResponse:
        entry = build_experience_entry(request)
        profile = await self.profiles.mutate_experience(
            identity.id,
            lambda experience: [entry] + experience,
        )
        if profile is None:
            raise NotFoundError(message="No profile found")
        return ProfileResponse.model_validate(profile)

    async def remove_experience(
        self, identity: UserIdentity, experience_id: str
    ) -> ProfileResponse:
        """Drop the entry whose id matches; other entries keep their order."""
        profile = await self.profiles.mutate_experience(
            identity.id,
            lambda experience: [item for item in experience if item.get("id") != experience_id],
        )
        if profile is None:
            raise NotFoundError(message="No profile found")
        return ProfileResponse.model_validate(profile)
