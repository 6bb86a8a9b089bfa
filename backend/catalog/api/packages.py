"""Package and add-on endpoints."""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.package import AddonResponse, AddonWithPackageResponse, PackageResponse
from ..schemas.sync import ImportResultResponse
from ..services.package_service import PackageService
from ..services.sync_service import SyncService
from .deps import get_sync_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/packages", tags=["packages"])


@router.get("", response_model=List[PackageResponse])
def list_packages(db: Session = Depends(get_db)):
    """All packages with their add-ons, cheapest first."""
    return PackageService(db).list_packages()


@router.get("/addons/standalone", response_model=List[AddonResponse])
def list_standalone_addons(db: Session = Depends(get_db)):
    return PackageService(db).list_standalone_addons()


@router.get("/addons/all", response_model=List[AddonWithPackageResponse])
def list_all_addons(db: Session = Depends(get_db)):
    """Every add-on, with the name of its package where it has one."""
    return [AddonWithPackageResponse.from_addon(a) for a in PackageService(db).list_all_addons()]


@router.get("/{package_id}", response_model=PackageResponse)
def get_package(package_id: str, db: Session = Depends(get_db)):
    return PackageService(db).get_package(package_id)


@router.post("/sync", response_model=ImportResultResponse)
def sync_packages(service: SyncService = Depends(get_sync_service)):
    """Replace packages and add-ons from packages.json in the storage bucket."""
    logger.info("Packages sync requested")
    return service.run_importer("packages").as_dict()
