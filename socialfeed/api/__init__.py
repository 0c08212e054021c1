from fastapi import APIRouter
from socialfeed.api import users, posts, likes, comments

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(posts.router, prefix="/posts", tags=["Posts"])
api_router.include_router(likes.router, prefix="/likes", tags=["Likes"])
api_router.include_router(comments.router, prefix="/comments", tags=["Comments"])
