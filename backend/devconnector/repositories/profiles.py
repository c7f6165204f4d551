"""
DevConnector Backend: Profile Repository
=========================================

What:  Profile documents, keyed by their owner's user id.

Composite operations:
    upsert(user_id, fields)
        One logical operation from the caller's view: set the provided
        fields on the existing profile, or create it. Read-then-write in a
        single transaction; no stronger atomicity is attempted.
    mutate_experience(user_id, mutate)
        Rewrite the embedded experience list of the user's profile.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from devconnector.models import Profile
from devconnector.repositories.base import ListMutation, Repository, parse_id

logger = logging.getLogger(__name__)


class ProfileRepository(Repository[Profile]):
    model = Profile

    async def find_by_user(self, user_id: Any) -> Optional[Profile]:
        pk = parse_id(user_id)
        if pk is None:
            return None
        return await self.find_one(Profile.user_id == pk)

    async def list_all(self) -> List[Profile]:
        return await self.find(order_by=(Profile.date,))

    async def upsert(self, user_id: uuid.UUID, fields: Dict[str, Any]) -> Profile:
        """
        Create or update the profile of `user_id`.

        Only keys present in `fields` are written; anything else on an
        existing profile is left as it was.
        """
        async with self._transaction("upsert") as session:
            result = await session.execute(select(Profile).where(Profile.user_id == user_id))
            profile = result.scalars().first()

            if profile is None:
                profile = Profile(user_id=user_id, **fields)
                session.add(profile)
                logger.info("Creating profile for user %s", user_id)
            else:
                for name, value in fields.items():
                    setattr(profile, name, value)
                logger.info("Updating profile for user %s", user_id)

            await session.flush()
            # The owner relationship is needed after the session closes
            await session.refresh(profile, attribute_names=["user"])
            return profile

    async def delete_by_user(self, user_id: Any) -> int:
        pk = parse_id(user_id)
        if pk is None:
            return 0
        return await self.delete_where(Profile.user_id == pk)

    async def mutate_experience(self, user_id: Any, mutate: ListMutation) -> Optional[Profile]:
        pk = parse_id(user_id)
        if pk is None:
            return None
        return await self._mutate_list("experience", mutate, Profile.user_id == pk)
