"""API routes."""

from .folders import router as folders_router
from .images import router as images_router
from .packages import router as packages_router
from .faqs import router as faqs_router
from .testimonials import router as testimonials_router
from .sync import router as sync_router

__all__ = [
    "folders_router",
    "images_router",
    "packages_router",
    "faqs_router",
    "testimonials_router",
    "sync_router",
]
