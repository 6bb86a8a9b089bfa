"""FAQ category and FAQ models, replaced wholesale from faq.json."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class FaqCategory(Base):
    __tablename__ = "faq_categories"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    # Position in faq.json; listings keep document order.
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    faqs = relationship("Faq", back_populates="category", order_by="Faq.position")


class Faq(Base):
    __tablename__ = "faqs"

    id = Column(String(36), primary_key=True)
    category_id = Column(String(36), ForeignKey("faq_categories.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("FaqCategory", back_populates="faqs")
