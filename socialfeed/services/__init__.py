from socialfeed.services.user import UserService
from socialfeed.services.post import PostService
from socialfeed.services.like import LikeService
from socialfeed.services.comment import CommentService
from socialfeed.services.follow import FollowService
from socialfeed.services.feed import FeedService

__all__ = [
    "UserService", "PostService", "LikeService",
    "CommentService", "FollowService", "FeedService",
]
