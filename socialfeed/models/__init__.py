from socialfeed.models.user import User
from socialfeed.models.post import Post
from socialfeed.models.comment import Comment
from socialfeed.models.like import Like
from socialfeed.models.follow import Follow

__all__ = ["User", "Post", "Comment", "Like", "Follow"]
