"""FAQ endpoints."""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.faq import (
    FaqCategoryResponse,
    FaqCategorySummary,
    FaqResponse,
    FaqWithCategoryResponse,
)
from ..schemas.sync import ImportResultResponse
from ..services.faq_service import FaqService
from ..services.sync_service import SyncService
from .deps import get_sync_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/faqs", tags=["faqs"])


@router.get("", response_model=List[FaqCategoryResponse])
def list_faqs(db: Session = Depends(get_db)):
    """All categories, each with its FAQs in document order."""
    return FaqService(db).list_categories()


@router.get("/categories", response_model=List[FaqCategorySummary])
def list_categories(db: Session = Depends(get_db)):
    return FaqService(db).list_categories()


@router.get("/categories/{category_id}", response_model=FaqCategoryResponse)
def get_category(category_id: str, db: Session = Depends(get_db)):
    return FaqService(db).get_category(category_id)


@router.get("/categories/{category_id}/faqs", response_model=List[FaqResponse])
def list_category_faqs(category_id: str, db: Session = Depends(get_db)):
    return FaqService(db).list_faqs_in_category(category_id)


@router.get("/questions/{faq_id}", response_model=FaqWithCategoryResponse)
def get_faq(faq_id: str, db: Session = Depends(get_db)):
    return FaqWithCategoryResponse.from_faq(FaqService(db).get_faq(faq_id))


@router.post("/sync", response_model=ImportResultResponse)
def sync_faqs(service: SyncService = Depends(get_sync_service)):
    """Replace FAQ categories and questions from faq.json in the storage bucket."""
    logger.info("FAQs sync requested")
    return service.run_importer("faqs").as_dict()
