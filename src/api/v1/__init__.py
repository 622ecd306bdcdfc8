"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.posts import router as posts_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.social import comments_router, likes_router, post_comments_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(posts_router)
router.include_router(likes_router)
router.include_router(post_comments_router)
router.include_router(comments_router)
