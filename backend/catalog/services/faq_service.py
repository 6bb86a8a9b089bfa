"""FAQ categories and questions: read access and the faq.json importer."""

import logging
from typing import Any, List

from sqlalchemy.orm import Session

from ..models.faq import Faq, FaqCategory
from ..repositories.base import new_id
from ..repositories.faq_repository import FaqCategoryRepository, FaqRepository
from .document_import import DocumentImporter, ImportResult, missing_fields

logger = logging.getLogger(__name__)


class FaqService:
    def __init__(self, db: Session):
        self.db = db
        self.category_repo = FaqCategoryRepository(db)
        self.faq_repo = FaqRepository(db)

    def list_categories(self) -> List[FaqCategory]:
        return self.category_repo.get_all()

    def get_category(self, category_id: str) -> FaqCategory:
        return self.category_repo.get_by_id(category_id)

    def list_faqs_in_category(self, category_id: str) -> List[Faq]:
        # 404 for an unknown category rather than an empty list.
        self.category_repo.get_by_id(category_id)
        return self.faq_repo.get_by_category(category_id)

    def get_faq(self, faq_id: str) -> Faq:
        return self.faq_repo.get_by_id(faq_id)


class FaqImporter(DocumentImporter):
    """Replaces FAQ categories and FAQs from ``{categories: [{name, faqs}]}``.

    Categories without a name are skipped with a warning (or fail the import
    when strict). FAQ entries lacking a question or an answer are dropped.
    """

    name = "faqs"

    @classmethod
    def from_settings(cls, db: Session, storage, settings) -> "FaqImporter":
        return cls(
            db,
            storage,
            bucket=settings.supabase_storage_bucket,
            document=settings.faq_json_file,
            strict=settings.faqs_strict,
        )

    def extract_records(self, payload: Any) -> List[Any]:
        return self.require_list(payload, "categories")

    def validate_record(self, record: Any) -> List[str]:
        return missing_fields(record, ("name",))

    def replace_rows(self, records: List[Any], result: ImportResult, payload: Any) -> None:
        FaqRepository(self.db).delete_all()
        FaqCategoryRepository(self.db).delete_all()

        for position, record in enumerate(records):
            category = FaqCategory(id=new_id(), name=str(record["name"]), position=position)
            self.db.add(category)
            self.db.flush()
            result.add("faq_categories")

            entries = record.get("faqs") or []
            if not isinstance(entries, list):
                logger.warning(
                    "Category faqs is not an array; importing it empty",
                    extra={"importer": self.name, "category": category.name},
                )
                entries = []

            for faq_position, entry in enumerate(entries):
                if missing_fields(entry, ("question", "answer")):
                    result.skipped += 1
                    continue
                self.db.add(Faq(
                    id=new_id(),
                    category_id=category.id,
                    question=str(entry["question"]),
                    answer=str(entry["answer"]),
                    position=faq_position,
                ))
                result.add("faqs")
        self.db.flush()
