"""Folder and image schemas."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class FolderResponse(BaseModel):
    """Schema for folder response."""
    id: str
    name: str
    cloudinary_path: str
    is_event_folder: bool = False
    event_name: Optional[str] = None
    event_date: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ImageResponse(BaseModel):
    """Schema for image response."""
    id: str
    cloudinary_asset_id: str
    cloudinary_filename: str
    cloudinary_display_name: Optional[str] = None
    cloudinary_format: Optional[str] = None
    cloudinary_created_at: Optional[str] = None
    cloudinary_image_url: str
    folder_id: str

    class Config:
        from_attributes = True
