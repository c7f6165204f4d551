"""User documents: lookup by email and duplicate-safe creation."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from devconnector.exceptions import DuplicateError
from devconnector.models import User
from devconnector.repositories.base import Repository

logger = logging.getLogger(__name__)


class UserRepository(Repository[User]):
    model = User

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.find_one(User.email == email)

    async def email_exists(self, email: str) -> bool:
        async with self._transaction("email_exists") as session:
            result = await session.execute(select(User.id).where(User.email == email))
            return result.first() is not None

    async def create(self, **fields) -> User:
        """
        Insert a user.

        Raises:
            DuplicateError: the unique email index rejected the row (two
                registrations racing past the service's existence check)
        """
        async with self._transaction("create") as session:
            user = User(**fields)
            session.add(user)
            try:
                await session.flush()
            except IntegrityError:
                logger.info("Duplicate email rejected at insert")
                raise DuplicateError(message="User already exists", param="email")
            return user
