"""Database models."""

from .folder import Folder, FolderHierarchy
from .image import Image
from .package import Package, Addon
from .faq import FaqCategory, Faq
from .testimonial import Testimonial
from .sync_run import SyncRun

__all__ = [
    "Folder", "FolderHierarchy", "Image",
    "Package", "Addon",
    "FaqCategory", "Faq",
    "Testimonial",
    "SyncRun",
]
