"""One-way reconciliation of the Cloudinary folder tree into the catalog.

Walks each configured root depth-first (pre-order), upserting every visited
folder, its hierarchy edge and its not-yet-known assets. Running it again
against an unchanged tree writes nothing new: folders are keyed by path,
images by asset id, edges by (parent, child).

The walk uses an explicit stack, so folder depth never grows the Python call
stack. Children are visited in the order Cloudinary lists them, and a
subtree finishes (images and descendants) before its next sibling starts.
"""

import logging
from dataclasses import dataclass, asdict
from typing import List, Optional, Sequence, Set, Tuple

from sqlalchemy.orm import Session

from ..clients.cloudinary_client import Asset, NamespaceClient
from ..repositories.folder_repository import FolderRepository
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)

COVER_PREFIX = "cover"


def folder_name(cloudinary_path: str) -> str:
    """Display name of a folder: the last segment of its path."""
    return cloudinary_path.rstrip("/").split("/")[-1]


def is_cover_asset(display_name: Optional[str]) -> bool:
    """True when the last segment of *display_name* starts with "cover", any case."""
    if not display_name:
        return False
    return display_name.split("/")[-1].lower().startswith(COVER_PREFIX)


@dataclass
class ReconcileStats:
    folders_visited: int = 0
    folders_created: int = 0
    edges_created: int = 0
    images_inserted: int = 0
    images_skipped: int = 0
    event_folders_flagged: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


class FolderImageReconciler:
    """Mirrors Cloudinary folders and assets into the folders/images tables."""

    def __init__(self, db: Session, namespace: NamespaceClient):
        self.db = db
        self.namespace = namespace
        self.folder_repo = FolderRepository(db)
        self.image_repo = ImageRepository(db)

    def reconcile(self, root_paths: Sequence[str]) -> ReconcileStats:
        """Walk every root path. Store errors propagate; listing errors do not."""
        stats = ReconcileStats()
        for root in root_paths:
            logger.info("Reconciling Cloudinary root", extra={"root": root})
            self._walk(root, stats)

        logger.info("Folder/image reconcile complete", extra=stats.as_dict())
        return stats

    def _walk(self, root: str, stats: ReconcileStats) -> None:
        stack: List[Tuple[str, Optional[str]]] = [(root, None)]
        visited: Set[str] = set()

        while stack:
            path, parent_id = stack.pop()
            if path in visited:
                logger.warning("Folder listed twice in one walk; not revisiting", extra={"path": path})
                continue
            visited.add(path)

            children = self.namespace.list_subfolders(path)
            folder_id = self.upsert_folder(path, parent_id, stats)
            self.sync_images(path, folder_id, stats)
            stats.folders_visited += 1

            # Reversed so the stack pops children in listing order.
            for child in reversed(children):
                stack.append((child, folder_id))

    def upsert_folder(
        self,
        cloudinary_path: str,
        parent_id: Optional[str] = None,
        stats: Optional[ReconcileStats] = None,
    ) -> str:
        """Return the id of the folder for *cloudinary_path*, creating it if needed.

        When *parent_id* is given, also records the parent -> folder edge;
        an edge that already exists is left alone.
        """
        stats = stats or ReconcileStats()

        folder = self.folder_repo.get_by_path(cloudinary_path)
        if folder is None:
            folder, created = self.folder_repo.insert_or_get(
                cloudinary_path, folder_name(cloudinary_path)
            )
            if created:
                stats.folders_created += 1
                logger.debug("Created folder", extra={"path": cloudinary_path, "folder_id": folder.id})

        if parent_id and self.folder_repo.add_edge(parent_id, folder.id):
            stats.edges_created += 1

        self.db.commit()
        return folder.id

    def sync_images(
        self,
        cloudinary_path: str,
        folder_id: str,
        stats: Optional[ReconcileStats] = None,
    ) -> None:
        """Page through the folder's assets and insert the ones not seen before.

        Raises:
            ExternalUnavailableError: an asset page could not be fetched.
        """
        stats = stats or ReconcileStats()
        cursor: Optional[str] = None

        while True:
            page = self.namespace.list_assets(cloudinary_path, cursor)
            for asset in page.assets:
                self._sync_asset(asset, folder_id, stats)
            self.db.commit()

            if not page.next_cursor:
                return
            if page.next_cursor == cursor:
                logger.warning(
                    "Asset listing returned the same cursor twice; stopping",
                    extra={"path": cloudinary_path},
                )
                return
            cursor = page.next_cursor

    def _sync_asset(self, asset: Asset, folder_id: str, stats: ReconcileStats) -> None:
        if self.image_repo.exists_by_asset_id(asset.asset_id):
            stats.images_skipped += 1
            return

        if is_cover_asset(asset.display_name):
            # Committed on its own so the flag survives a failed image insert.
            self.folder_repo.mark_event_folder(
                folder_id,
                event_name=asset.context.get("event_name") or None,
                event_date=asset.context.get("event_date") or None,
            )
            self.db.commit()
            stats.event_folders_flagged += 1
            logger.info(
                "Folder flagged as event folder",
                extra={"folder_id": folder_id, "cover": asset.display_name},
            )

        self.image_repo.insert(
            asset_id=asset.asset_id,
            filename=asset.filename,
            display_name=asset.display_name,
            format=asset.format,
            created_at=asset.created_at,
            url=asset.url,
            folder_id=folder_id,
        )
        stats.images_inserted += 1
