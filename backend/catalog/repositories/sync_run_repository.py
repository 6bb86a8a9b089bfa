"""Repository for sync run records."""

from datetime import datetime, timezone
from typing import List, Optional

from ..exceptions import SyncRunNotFoundError
from ..models.sync_run import SyncRun
from .base import BaseRepository, new_id


class SyncRunRepository(BaseRepository[SyncRun]):
    model_class = SyncRun
    not_found_error = SyncRunNotFoundError

    def start(self, trigger: str) -> SyncRun:
        run = SyncRun(
            id=new_id(),
            trigger=trigger,
            status="running",
            stage_results=[],
            started_at=datetime.now(timezone.utc),
        )
        self.db.add(run)
        self.db.commit()
        self.db.refresh(run)
        return run

    def finish(
        self,
        run_id: str,
        stage_results: list,
        failed_stage: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> SyncRun:
        run = self.get_by_id(run_id)
        run.stage_results = stage_results
        run.status = "failed" if failed_stage else "completed"
        run.failed_stage = failed_stage
        run.error_message = error_message
        run.completed_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(run)
        return run

    def get_recent(self, limit: int = 10) -> List[SyncRun]:
        return (
            self.db.query(SyncRun)
            .order_by(SyncRun.started_at.desc())
            .limit(limit)
            .all()
        )
