"""Testimonials: read access and the testimonials.json importer."""

import logging
from typing import Any, List

from sqlalchemy.orm import Session

from ..models.testimonial import Testimonial
from ..repositories.base import new_id
from ..repositories.testimonial_repository import TestimonialRepository
from .document_import import DocumentImporter, ImportResult, missing_fields, non_scalar_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("heading", "details", "name", "occasion", "date")
TEXT_FIELDS = REQUIRED_FIELDS + ("image_url",)


class TestimonialService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TestimonialRepository(db)

    def list_testimonials(self) -> List[Testimonial]:
        return self.repo.get_all()

    def get_testimonial(self, testimonial_id: str) -> Testimonial:
        return self.repo.get_by_id(testimonial_id)


class TestimonialImporter(DocumentImporter):
    """Replaces the testimonials table with the contents of a JSON array.

    Strict by default: one record missing a required field fails the whole
    import and leaves the current testimonials in place.
    """

    name = "testimonials"

    @classmethod
    def from_settings(cls, db: Session, storage, settings) -> "TestimonialImporter":
        return cls(
            db,
            storage,
            bucket=settings.supabase_storage_bucket,
            document=settings.testimonials_json_file,
            strict=settings.testimonials_strict,
        )

    def extract_records(self, payload: Any) -> List[Any]:
        return self.require_list(payload)

    def validate_record(self, record: Any) -> List[str]:
        return missing_fields(record, REQUIRED_FIELDS)

    def invalid_fields(self, record: Any) -> List[str]:
        return non_scalar_fields(record, TEXT_FIELDS)

    def replace_rows(self, records: List[Any], result: ImportResult, payload: Any) -> None:
        TestimonialRepository(self.db).delete_all()
        for record in records:
            self.db.add(Testimonial(
                id=new_id(),
                heading=str(record["heading"]),
                details=str(record["details"]),
                name=str(record["name"]),
                occasion=str(record["occasion"]),
                date=str(record["date"]),
                image_url=str(record["image_url"]) if record.get("image_url") else None,
            ))
            result.add("testimonials")
        self.db.flush()
