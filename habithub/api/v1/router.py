# ============================================================================
# FILE: habithub/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from habithub.api.v1.endpoints import (
    auth, comments, habits, likes, messages, posts, reflections, uploads, users,
)

# Auth service: identities, tokens and habits
auth_router = APIRouter()
auth_router.include_router(auth.router, prefix="/auth", tags=["auth"])
auth_router.include_router(users.router, prefix="/users", tags=["users"])
auth_router.include_router(habits.router, prefix="/habits", tags=["habits"])

# Media service: posts and everything hanging off them
media_router = APIRouter()
media_router.include_router(posts.router, prefix="/posts", tags=["posts"])
media_router.include_router(comments.router, prefix="/comments", tags=["comments"])
media_router.include_router(likes.router, prefix="/likes", tags=["likes"])
media_router.include_router(reflections.router, prefix="/reflections", tags=["reflections"])
media_router.include_router(messages.router, prefix="/messages", tags=["messages"])

# Upload service: media files
upload_router = APIRouter()
upload_router.include_router(uploads.router, tags=["uploads"])
