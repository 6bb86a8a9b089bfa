"""Sync run endpoints: trigger a full run and inspect past runs."""

import logging
from fastapi import APIRouter, Depends, Query
from typing import List

from ..schemas.sync import SyncRunResponse
from ..services.sync_service import SyncService
from .deps import get_sync_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.post("/run", response_model=SyncRunResponse)
def run_sync(service: SyncService = Depends(get_sync_service)):
    """Run folders -> testimonials -> packages -> FAQs.

    A failing stage answers with a SYNC_FAILED error naming the stage; the
    run is still recorded and visible under /api/sync/runs.
    """
    logger.info("Manual sync run requested")
    return service.run_sync(trigger="manual")


@router.get("/runs", response_model=List[SyncRunResponse])
def list_runs(
    limit: int = Query(20, ge=1, le=100),
    service: SyncService = Depends(get_sync_service),
):
    """Most recent sync runs first."""
    return service.list_runs(limit)


@router.get("/runs/{run_id}", response_model=SyncRunResponse)
def get_run(run_id: str, service: SyncService = Depends(get_sync_service)):
    return service.get_run(run_id)
