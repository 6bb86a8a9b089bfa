"""Repositories for packages and add-ons."""

from typing import List

from sqlalchemy.orm import selectinload

from ..exceptions import PackageNotFoundError
from ..models.package import Addon, Package
from .base import BaseRepository


class PackageRepository(BaseRepository[Package]):
    model_class = Package
    not_found_error = PackageNotFoundError

    def _base_query(self):
        return self.db.query(Package).options(selectinload(Package.addons))

    def get_all_with_addons(self) -> List[Package]:
        """Packages with their linked add-ons, cheapest first."""
        return self._base_query().order_by(Package.price_aud.asc(), Package.name).all()


class AddonRepository(BaseRepository[Addon]):
    model_class = Addon

    def get_standalone(self) -> List[Addon]:
        return self.db.query(Addon).filter(Addon.package_id.is_(None)).order_by(Addon.name).all()

    def get_all(self) -> List[Addon]:
        return (
            self.db.query(Addon)
            .options(selectinload(Addon.package))
            .order_by(Addon.name)
            .all()
        )
