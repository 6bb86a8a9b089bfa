"""Image endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.folder import ImageResponse
from ..services.folder_service import FolderService

router = APIRouter(prefix="/api/images", tags=["images"])


# Declared before /{folder_id} so the literal segment wins.
@router.get("/by-folder-name/{folder_name}", response_model=List[ImageResponse])
def list_images_by_folder_name(folder_name: str, db: Session = Depends(get_db)):
    """Images in every folder whose display name matches."""
    return FolderService(db).list_images_by_folder_name(folder_name)


@router.get("/{folder_id}", response_model=List[ImageResponse])
def list_images(folder_id: str, db: Session = Depends(get_db)):
    """Images in one folder. An unknown id gives an empty list."""
    return FolderService(db).list_images(folder_id)
