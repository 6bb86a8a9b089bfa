"""Testimonial endpoints."""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.sync import ImportResultResponse
from ..schemas.testimonial import TestimonialResponse
from ..services.sync_service import SyncService
from ..services.testimonial_service import TestimonialService
from .deps import get_sync_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/testimonials", tags=["testimonials"])


@router.get("", response_model=List[TestimonialResponse])
def list_testimonials(db: Session = Depends(get_db)):
    """Testimonials, newest first."""
    return TestimonialService(db).list_testimonials()


@router.get("/{testimonial_id}", response_model=TestimonialResponse)
def get_testimonial(testimonial_id: str, db: Session = Depends(get_db)):
    return TestimonialService(db).get_testimonial(testimonial_id)


@router.post("/sync", response_model=ImportResultResponse)
def sync_testimonials(service: SyncService = Depends(get_sync_service)):
    """Replace testimonials from testimonials.json in the storage bucket."""
    logger.info("Testimonials sync requested")
    return service.run_importer("testimonials").as_dict()
