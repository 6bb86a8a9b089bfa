"""Pydantic schemas for API responses."""

from .folder import FolderResponse, ImageResponse
from .package import AddonResponse, AddonWithPackageResponse, PackageResponse
from .faq import (
    FaqResponse,
    FaqWithCategoryResponse,
    FaqCategorySummary,
    FaqCategoryResponse,
)
from .testimonial import TestimonialResponse
from .sync import ImportResultResponse, SyncRunResponse

__all__ = [
    "FolderResponse",
    "ImageResponse",
    "AddonResponse",
    "AddonWithPackageResponse",
    "PackageResponse",
    "FaqResponse",
    "FaqWithCategoryResponse",
    "FaqCategorySummary",
    "FaqCategoryResponse",
    "TestimonialResponse",
    "ImportResultResponse",
    "SyncRunResponse",
]
