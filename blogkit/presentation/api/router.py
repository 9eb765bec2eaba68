"""Top-level API router — the explicit routing table for every endpoint."""

from fastapi import APIRouter

from blogkit.presentation.api.endpoints.admin_blog import router as admin_blog_router
from blogkit.presentation.api.endpoints.admin_tags import router as admin_tags_router
from blogkit.presentation.api.endpoints.auth import router as auth_router
from blogkit.presentation.api.endpoints.blog import router as blog_router
from blogkit.presentation.api.endpoints.health import router as health_router
from blogkit.presentation.api.endpoints.tags import router as tags_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(blog_router)
router.include_router(admin_blog_router)
router.include_router(tags_router)
router.include_router(admin_tags_router)
