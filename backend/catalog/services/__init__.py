"""Business logic services."""

from .folder_service import FolderService
from .package_service import PackageService
from .faq_service import FaqService
from .testimonial_service import TestimonialService
from .sync_service import SyncService

__all__ = [
    "FolderService",
    "PackageService",
    "FaqService",
    "TestimonialService",
    "SyncService",
]
