"""Folder and folder hierarchy models mirrored from the Cloudinary namespace."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Folder(Base):
    """One row per Cloudinary folder path."""

    __tablename__ = "folders"

    # Primary key (UUID format, generated once)
    id = Column(String(36), primary_key=True)

    name = Column(String(255), nullable=False)  # last path segment
    # Natural key; immutable once created.
    cloudinary_path = Column(Text, nullable=False, unique=True)

    # Set when a "cover*" asset is found in the folder.
    is_event_folder = Column(Boolean, nullable=False, default=False)
    event_name = Column(String(255), nullable=True)
    event_date = Column(String(64), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    images = relationship("Image", back_populates="folder")


class FolderHierarchy(Base):
    """Directed parent -> child edge between two folders."""

    __tablename__ = "folder_hierarchy"
    __table_args__ = (
        Index("ix_folder_hierarchy_pair", "parent_folder_id", "folder_id", unique=True),
        Index("ix_folder_hierarchy_folder_id", "folder_id"),
    )

    id = Column(String(36), primary_key=True)
    parent_folder_id = Column(String(36), ForeignKey("folders.id", ondelete="CASCADE"), nullable=False)
    folder_id = Column(String(36), ForeignKey("folders.id", ondelete="CASCADE"), nullable=False)
