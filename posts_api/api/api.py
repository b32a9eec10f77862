from fastapi import APIRouter

from posts_api.api.routers import health_router, posts_router

router = APIRouter(prefix="/api")
router.include_router(health_router.router, tags=["health"])
router.include_router(posts_router.router, prefix="/posts", tags=["posts"])
