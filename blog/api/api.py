from fastapi import APIRouter
from blog.api.endpoints import (
    users,
    posts,
    comments,
    tags
)

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(comments.router, prefix="/posts/{post_id}/comments", tags=["comments"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
