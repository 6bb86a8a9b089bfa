"""Sync run and import result schemas."""

from pydantic import BaseModel
from datetime import datetime
from typing import Any, Dict, List, Optional


class ImportResultResponse(BaseModel):
    """Outcome of one document import."""
    name: str
    rows_written: int
    skipped: int
    counts: Dict[str, int] = {}


class SyncRunResponse(BaseModel):
    """Schema for sync run response."""
    id: str
    trigger: str
    status: str
    failed_stage: Optional[str] = None
    error_message: Optional[str] = None
    stage_results: List[Dict[str, Any]] = []
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
