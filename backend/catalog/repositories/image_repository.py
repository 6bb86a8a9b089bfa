"""Repository for images mirrored from Cloudinary assets."""

from typing import List

from ..exceptions import ConstraintConflictError
from ..models.folder import Folder
from ..models.image import Image
from .base import BaseRepository, new_id


class ImageRepository(BaseRepository[Image]):
    """Append-only access to the images table."""

    model_class = Image

    def exists_by_asset_id(self, asset_id: str) -> bool:
        return (
            self.db.query(Image.id).filter(Image.cloudinary_asset_id == asset_id).first()
            is not None
        )

    def insert(
        self,
        *,
        asset_id: str,
        filename: str,
        display_name,
        format,
        created_at,
        url: str,
        folder_id: str,
    ) -> Image:
        """Insert a new image row. A duplicate asset id is surfaced, not swallowed."""
        image = Image(
            id=new_id(),
            cloudinary_asset_id=asset_id,
            cloudinary_filename=filename,
            cloudinary_display_name=display_name,
            cloudinary_format=format,
            cloudinary_created_at=created_at,
            cloudinary_image_url=url,
            folder_id=folder_id,
        )
        if not self._insert_or_conflict(image):
            raise ConstraintConflictError("images", asset_id)
        return image

    def get_by_folder(self, folder_id: str) -> List[Image]:
        return (
            self.db.query(Image)
            .filter(Image.folder_id == folder_id)
            .order_by(Image.cloudinary_created_at, Image.cloudinary_filename)
            .all()
        )

    def get_by_folder_name(self, folder_name: str) -> List[Image]:
        return (
            self.db.query(Image)
            .join(Folder, Image.folder_id == Folder.id)
            .filter(Folder.name == folder_name)
            .order_by(Image.cloudinary_created_at, Image.cloudinary_filename)
            .all()
        )
