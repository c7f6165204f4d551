"""
DevConnector Backend: Profile Model
====================================

What:  ORM model for the `profiles` table, one row per user.
How:   Scalar fields are ordinary columns; `skills`, `social` and
       `experience` are stored inline as JSON, the way a document store
       embeds them in the parent document.

Embedded shapes:
    skills:      ["Python", "FastAPI"]
    social:      {"twitter": "...", "linkedin": "..."} or null
    experience:  [{"id", "title", "company", "location", "from", "to",
                   "current", "description"}, ...]   newest first

Change tracking:
    JSON columns are not mutation-tracked. Writers assign a NEW list/dict
    to the attribute instead of mutating in place.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnector.database import Base, UTCDateTime
from devconnector.models.user import User, utcnow


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # One-to-one with users: the unique constraint enforces it
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        unique=True,
        index=True,
    )

    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    githubusername: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    skills: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    social: Mapped[Optional[Dict[str, str]]] = mapped_column(JSON, nullable=True)
    experience: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    date: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Owner name/avatar are always needed in responses; load them eagerly
    user: Mapped[User] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, user_id={self.user_id})>"
