"""Read access to the mirrored folder tree and its images."""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.folder import Folder
from ..models.image import Image
from ..repositories.folder_repository import FolderRepository
from ..repositories.image_repository import ImageRepository


class FolderService:
    """Folder and image lookups for the API.

    Public methods:
        list_folders        -- all folders, or the children of a parent by id or name
        get_folder          -- lookup by id (404 if missing)
        list_images         -- images of a folder id
        list_images_by_folder_name
    """

    def __init__(self, db: Session):
        self.db = db
        self.folder_repo = FolderRepository(db)
        self.image_repo = ImageRepository(db)

    def list_folders(
        self, parent_id: Optional[str] = None, parent_name: Optional[str] = None
    ) -> List[Folder]:
        if parent_id:
            return self.folder_repo.get_children(parent_id)
        if parent_name:
            return self.folder_repo.get_children_by_parent_name(parent_name)
        return self.folder_repo.get_all()

    def get_folder(self, folder_id: str) -> Folder:
        return self.folder_repo.get_by_id(folder_id)

    def list_images(self, folder_id: str) -> List[Image]:
        return self.image_repo.get_by_folder(folder_id)

    def list_images_by_folder_name(self, folder_name: str) -> List[Image]:
        return self.image_repo.get_by_folder_name(folder_name)
