"""Repository for testimonials."""

from typing import List

from ..exceptions import TestimonialNotFoundError
from ..models.testimonial import Testimonial
from .base import BaseRepository


class TestimonialRepository(BaseRepository[Testimonial]):
    model_class = Testimonial
    not_found_error = TestimonialNotFoundError

    def get_all(self) -> List[Testimonial]:
        """Newest first by the testimonial's own date."""
        return self.db.query(Testimonial).order_by(Testimonial.date.desc()).all()
