"""Testimonial schemas."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class TestimonialResponse(BaseModel):
    """Schema for testimonial response."""
    id: str
    heading: str
    details: str
    name: str
    occasion: str
    date: str
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
