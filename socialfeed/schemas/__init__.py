from socialfeed.schemas.common import Updated, NotFoundOrUnauthorized
from socialfeed.schemas.user import UserSummary, UserProfile, UserSearchResult
from socialfeed.schemas.post import (
    PostCreate, PostUpdate, PostResponse, PostWithAuthor, PostDetail, LikedPost, FeedItem
)
from socialfeed.schemas.comment import (
    CommentCreate, CommentUpdate, CommentResponse, CommentWithAuthor
)
from socialfeed.schemas.like import LikeCreate, LikeResponse, LikeResult, Liker, PostLikesResponse
from socialfeed.schemas.follow import FollowResponse, FollowResult, FollowUser, FollowCounts

__all__ = [
    "Updated", "NotFoundOrUnauthorized",
    "UserSummary", "UserProfile", "UserSearchResult",
    "PostCreate", "PostUpdate", "PostResponse", "PostWithAuthor", "PostDetail",
    "LikedPost", "FeedItem",
    "CommentCreate", "CommentUpdate", "CommentResponse", "CommentWithAuthor",
    "LikeCreate", "LikeResponse", "LikeResult", "Liker", "PostLikesResponse",
    "FollowResponse", "FollowResult", "FollowUser", "FollowCounts",
]
