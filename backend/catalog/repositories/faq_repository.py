"""Repositories for FAQ categories and FAQs."""

from typing import List

from sqlalchemy.orm import selectinload

from ..exceptions import FaqCategoryNotFoundError, FaqNotFoundError
from ..models.faq import Faq, FaqCategory
from .base import BaseRepository


class FaqCategoryRepository(BaseRepository[FaqCategory]):
    model_class = FaqCategory
    not_found_error = FaqCategoryNotFoundError

    def _base_query(self):
        return self.db.query(FaqCategory).options(selectinload(FaqCategory.faqs))

    def get_all(self) -> List[FaqCategory]:
        return self._base_query().order_by(FaqCategory.position, FaqCategory.name).all()


class FaqRepository(BaseRepository[Faq]):
    model_class = Faq
    not_found_error = FaqNotFoundError

    def _base_query(self):
        return self.db.query(Faq).options(selectinload(Faq.category))

    def get_by_category(self, category_id: str) -> List[Faq]:
        return (
            self._base_query()
            .filter(Faq.category_id == category_id)
            .order_by(Faq.position)
            .all()
        )
