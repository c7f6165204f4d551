"""
DevConnector Backend: Repositories
===================================

Document access for users, profiles and posts. One instance of each is
built by the app factory and shared by every request.
"""

from devconnector.repositories.posts import PostRepository
from devconnector.repositories.profiles import ProfileRepository
from devconnector.repositories.users import UserRepository

__all__ = ["PostRepository", "ProfileRepository", "UserRepository"]
