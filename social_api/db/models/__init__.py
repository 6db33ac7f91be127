# Import every model so Base.metadata knows all tables
from social_api.db.models.user import User
from social_api.db.models.post import Post

__all__ = ["User", "Post"]
