"""Repository for folders and the folder hierarchy."""

from typing import List, Optional, Tuple

from sqlalchemy import select

from ..exceptions import ConstraintConflictError, FolderNotFoundError
from ..models.folder import Folder, FolderHierarchy
from .base import BaseRepository, new_id


class FolderRepository(BaseRepository[Folder]):
    """Data access layer for folders mirrored from Cloudinary."""

    model_class = Folder
    not_found_error = FolderNotFoundError

    def get_by_path(self, cloudinary_path: str) -> Optional[Folder]:
        return self.db.query(Folder).filter(Folder.cloudinary_path == cloudinary_path).first()

    def insert_or_get(self, cloudinary_path: str, name: str) -> Tuple[Folder, bool]:
        """Insert a folder for *cloudinary_path*, or return the row that already holds it.

        The unique constraint on the path is the serialization point: a
        concurrent writer that wins the race makes our insert fail, and we
        re-read its row instead of raising.

        Returns:
            (folder, created)
        """
        folder = Folder(id=new_id(), name=name, cloudinary_path=cloudinary_path, is_event_folder=False)
        if self._insert_or_conflict(folder):
            return folder, True

        existing = self.get_by_path(cloudinary_path)
        if existing is None:
            # The conflict was not on the path after all.
            raise ConstraintConflictError("folders", cloudinary_path)
        return existing, False

    def add_edge(self, parent_folder_id: str, folder_id: str) -> bool:
        """Record a parent -> child edge. Returns False if the pair already exists."""
        exists = (
            self.db.query(FolderHierarchy.id)
            .filter(
                FolderHierarchy.parent_folder_id == parent_folder_id,
                FolderHierarchy.folder_id == folder_id,
            )
            .first()
        )
        if exists:
            return False
        edge = FolderHierarchy(id=new_id(), parent_folder_id=parent_folder_id, folder_id=folder_id)
        return self._insert_or_conflict(edge)

    def mark_event_folder(
        self, folder_id: str, event_name: Optional[str], event_date: Optional[str]
    ) -> None:
        """Flag a folder as an event folder with metadata from its cover asset."""
        folder = self.get_by_id(folder_id)
        folder.is_event_folder = True
        folder.event_name = event_name
        folder.event_date = event_date
        self.db.flush()

    # -- reads --------------------------------------------------------------

    def get_all(self) -> List[Folder]:
        return self.db.query(Folder).order_by(Folder.cloudinary_path).all()

    def get_children(self, parent_folder_id: str) -> List[Folder]:
        return (
            self.db.query(Folder)
            .join(FolderHierarchy, FolderHierarchy.folder_id == Folder.id)
            .filter(FolderHierarchy.parent_folder_id == parent_folder_id)
            .order_by(Folder.name)
            .all()
        )

    def get_children_by_parent_name(self, parent_name: str) -> List[Folder]:
        """Children of every folder whose display name is *parent_name*."""
        parent_ids = select(Folder.id).where(Folder.name == parent_name)
        return (
            self.db.query(Folder)
            .join(FolderHierarchy, FolderHierarchy.folder_id == Folder.id)
            .filter(FolderHierarchy.parent_folder_id.in_(parent_ids))
            .order_by(Folder.name)
            .all()
        )
