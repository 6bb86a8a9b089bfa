"""Data access repositories."""

from .base import BaseRepository
from .folder_repository import FolderRepository
from .image_repository import ImageRepository
from .package_repository import PackageRepository, AddonRepository
from .faq_repository import FaqCategoryRepository, FaqRepository
from .testimonial_repository import TestimonialRepository
from .sync_run_repository import SyncRunRepository

__all__ = [
    "BaseRepository",
    "FolderRepository",
    "ImageRepository",
    "PackageRepository",
    "AddonRepository",
    "FaqCategoryRepository",
    "FaqRepository",
    "TestimonialRepository",
    "SyncRunRepository",
]
