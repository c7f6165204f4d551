"""
DevConnector Backend: Post Model
=================================

What:  ORM model for the `posts` table.

Denormalized author snapshot:
    `name` and `avatar` are copied from the author at creation time and never
    refreshed. The same holds for each embedded comment.

Embedded shapes (JSON, newest first):
    likes:     [{"id": "<uuid>", "user": "<user uuid>"}]
    comments:  [{"id", "user", "text", "name", "avatar", "date"}]

Index on date DESC:
    GET /api/posts always lists newest first.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import JSON, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from devconnector.database import Base, UTCDateTime
from devconnector.models.user import utcnow


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    likes: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    date: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_posts_date", date.desc()),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id})>"
