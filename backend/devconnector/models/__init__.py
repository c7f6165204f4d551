from devconnector.models.post import Post
from devconnector.models.profile import Profile
from devconnector.models.user import User

__all__ = ["Post", "Profile", "User"]
