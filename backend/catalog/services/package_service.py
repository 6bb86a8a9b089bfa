"""Packages and add-ons: read access and the packages.json importer."""

import logging
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.package import Addon, Package
from ..repositories.base import new_id
from ..repositories.package_repository import AddonRepository, PackageRepository
from .document_import import DocumentImporter, ImportResult, missing_fields

logger = logging.getLogger(__name__)


class PackageService:
    def __init__(self, db: Session):
        self.db = db
        self.package_repo = PackageRepository(db)
        self.addon_repo = AddonRepository(db)

    def list_packages(self) -> List[Package]:
        return self.package_repo.get_all_with_addons()

    def get_package(self, package_id: str) -> Package:
        return self.package_repo.get_by_id(package_id)

    def list_standalone_addons(self) -> List[Addon]:
        return self.addon_repo.get_standalone()

    def list_all_addons(self) -> List[Addon]:
        return self.addon_repo.get_all()


def _field(record: dict, *keys: str) -> Any:
    """First present value among the accepted spellings of a field."""
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _price(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid price: {value!r}")
    return float(value)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


class PackageImporter(DocumentImporter):
    """Replaces packages and add-ons from ``{packages: [...], addons: [...]}``.

    Lenient by default. A package without a name is skipped (or fails the
    import when strict); add-ons without a name are always skipped. Rows
    that the database rejects are logged and skipped one by one.
    """

    name = "packages"

    @classmethod
    def from_settings(cls, db: Session, storage, settings) -> "PackageImporter":
        return cls(
            db,
            storage,
            bucket=settings.supabase_storage_bucket,
            document=settings.packages_json_file,
            strict=settings.packages_strict,
        )

    def extract_records(self, payload: Any) -> List[Any]:
        packages = self.require_list(payload, "packages")
        # Shape-checked here so a bad add-on list fails before any delete.
        self.require_list(payload, "addons", optional=True)
        return packages

    def validate_record(self, record: Any) -> List[str]:
        return missing_fields(record, ("name",))

    def replace_rows(self, records: List[Any], result: ImportResult, payload: Any) -> None:
        AddonRepository(self.db).delete_all()
        PackageRepository(self.db).delete_all()

        for record in records:
            package_id = new_id()
            inserted = self._insert(
                "packages",
                result,
                lambda: Package(
                    id=package_id,
                    name=str(record["name"]),
                    ideal_for=_text(_field(record, "idealFor", "ideal_for")),
                    includes=record.get("includes"),
                    price_aud=_price(_field(record, "priceAUD", "price_aud")),
                    image=record.get("image"),
                ),
            )
            nested = record.get("addons") or []
            if inserted and isinstance(nested, list):
                self._insert_addons(nested, package_id, result)

        standalone = self.require_list(payload, "addons", optional=True)
        self._insert_addons(standalone, None, result)

    def _insert_addons(self, addons: List[Any], package_id: Optional[str], result: ImportResult) -> None:
        for index, addon in enumerate(addons):
            if missing_fields(addon, ("name",)):
                result.skipped += 1
                logger.warning(
                    "Skipping add-on without a name",
                    extra={"importer": self.name, "index": index, "package_id": package_id},
                )
                continue
            self._insert(
                "addons",
                result,
                lambda: Addon(
                    id=new_id(),
                    name=str(addon["name"]),
                    price_aud=_price(_field(addon, "priceAUD", "price_aud")),
                    unit=_text(addon.get("unit")),
                    delivery=_text(addon.get("delivery")),
                    package_id=package_id,
                ),
            )

    def _insert(self, table: str, result: ImportResult, build) -> bool:
        """Insert one row under a savepoint; a rejected row is skipped, not fatal."""
        savepoint = self.db.begin_nested()
        try:
            self.db.add(build())
            self.db.flush()
        except (SQLAlchemyError, ValueError, TypeError) as e:
            savepoint.rollback()
            result.skipped += 1
            logger.warning("Skipping %s row: %s", table, e, extra={"importer": self.name})
            return False
        savepoint.commit()
        result.add(table)
        return True
