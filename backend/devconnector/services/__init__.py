"""
DevConnector Backend: Services Layer
=====================================

What:  Business rules between routes (HTTP) and repositories (persistence).
Why:   Routes handle HTTP; services decide ownership, duplicates and
       not-found conditions and raise the matching application exception.

Service Inventory:
    - UserService:    register, login, current user
    - ProfileService: profile upsert/lookup, experience, account deletion
    - PostService:    posts, likes, comments
"""

from devconnector.services.post_service import PostService
from devconnector.services.profile_service import ProfileService
from devconnector.services.user_service import UserService

__all__ = ["PostService", "ProfileService", "UserService"]
