"""Folder endpoints over the mirrored Cloudinary tree."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..schemas.folder import FolderResponse
from ..services.folder_service import FolderService

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.get("", response_model=List[FolderResponse])
def list_folders(
    parent_id: Optional[str] = Query(None, description="Only children of this folder id"),
    parent_name: Optional[str] = Query(None, description="Only children of folders with this name"),
    db: Session = Depends(get_db),
):
    """List all folders, or the direct children of a parent."""
    return FolderService(db).list_folders(parent_id=parent_id, parent_name=parent_name)


@router.get("/{folder_id}", response_model=FolderResponse)
def get_folder(folder_id: str, db: Session = Depends(get_db)):
    return FolderService(db).get_folder(folder_id)
