"""Image model: one row per Cloudinary asset."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Image(Base):
    """Append-only mirror of a Cloudinary asset; sync never updates these rows."""

    __tablename__ = "images"

    id = Column(String(36), primary_key=True)

    cloudinary_asset_id = Column(String(64), nullable=False, unique=True)
    cloudinary_filename = Column(Text, nullable=False)
    cloudinary_display_name = Column(Text, nullable=True)
    cloudinary_format = Column(String(32), nullable=True)
    cloudinary_created_at = Column(String(64), nullable=True)
    cloudinary_image_url = Column(Text, nullable=False)

    folder_id = Column(String(36), ForeignKey("folders.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    folder = relationship("Folder", back_populates="images")
