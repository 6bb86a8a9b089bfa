"""Package and add-on models, replaced wholesale from packages.json."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, JSON, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Package(Base):
    __tablename__ = "packages"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    ideal_for = Column(Text, nullable=True)
    # Free text or a list of inclusions, stored as given in the document.
    includes = Column(JSON, nullable=True)
    price_aud = Column(Float, nullable=True)
    image = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    addons = relationship("Addon", back_populates="package", order_by="Addon.name")


class Addon(Base):
    """Optional extra; package_id NULL means a standalone add-on."""

    __tablename__ = "addons"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    price_aud = Column(Float, nullable=True)
    unit = Column(String(64), nullable=True)
    delivery = Column(Text, nullable=True)
    package_id = Column(String(36), ForeignKey("packages.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    package = relationship("Package", back_populates="addons")
