"""Testimonial model, replaced wholesale from testimonials.json."""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func
from ..database import Base


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(String(36), primary_key=True)
    heading = Column(String(255), nullable=False)
    details = Column(Text, nullable=False)
    name = Column(String(255), nullable=False)
    occasion = Column(String(255), nullable=False)
    date = Column(String(64), nullable=False)
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
