# ============================================================================
# FILE: social_api/api/router.py
# ============================================================================
from fastapi import APIRouter
from social_api.api.endpoints import auth, posts

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
