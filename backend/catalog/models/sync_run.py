"""Sync run model for auditing orchestrator runs."""

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlalchemy.sql import func
from ..database import Base


class SyncRun(Base):
    """
    One row per orchestrator run (manual trigger or scheduled worker).

    Status transitions: running -> completed | failed
    """

    __tablename__ = "sync_runs"

    # Primary key (UUID format)
    id = Column(String(36), primary_key=True)

    # Allowed values: manual, scheduled
    trigger = Column(String(20), nullable=False, default="manual")

    # Allowed values: running, completed, failed
    status = Column(String(20), nullable=False, default="running")
    failed_stage = Column(String(50), nullable=True)
    error_message = Column(Text, nullable=True)

    # [{"stage": ..., "status": "ok"|"failed"|"skipped", ...}]
    stage_results = Column(JSON, nullable=False, default=list)

    started_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
