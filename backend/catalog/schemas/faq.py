"""FAQ schemas."""

from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class FaqResponse(BaseModel):
    """Schema for FAQ response."""
    id: str
    category_id: str
    question: str
    answer: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FaqWithCategoryResponse(FaqResponse):
    category_name: Optional[str] = None

    @classmethod
    def from_faq(cls, faq) -> "FaqWithCategoryResponse":
        data = FaqResponse.model_validate(faq).model_dump()
        data["category_name"] = faq.category.name if faq.category else None
        return cls(**data)


class FaqCategorySummary(BaseModel):
    """Category without its FAQs, for listings."""
    id: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FaqCategoryResponse(FaqCategorySummary):
    """Category with its FAQs in insertion order."""
    faqs: List[FaqResponse] = []
