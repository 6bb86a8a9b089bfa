"""Sync orchestrator: folders/images, then testimonials, packages and FAQs.

Stages run in a fixed order on one session. What a failing stage does to the
rest of the run is configurable through ``sync_isolate_stages``:

    False -- stop at the first failure, later stages are marked skipped
    True  -- run every stage and report all failures together

Either way every run leaves a SyncRun row with per-stage outcomes, and a run
with any failed stage ends in SyncFailedError naming the first one.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..clients.cloudinary_client import NamespaceClient
from ..clients.storage_client import DocumentStoreClient
from ..exceptions import CatalogException, ConfigurationMissingError, SyncFailedError
from ..models.sync_run import SyncRun
from ..repositories.sync_run_repository import SyncRunRepository
from .document_import import DocumentImporter, ImportResult
from .faq_service import FaqImporter
from .package_service import PackageImporter
from .reconcile_service import FolderImageReconciler
from .testimonial_service import TestimonialImporter

logger = logging.getLogger(__name__)

STAGES = ("folders", "testimonials", "packages", "faqs")

IMPORTERS = {
    "testimonials": TestimonialImporter,
    "packages": PackageImporter,
    "faqs": FaqImporter,
}


class SyncService:
    """Runs sync stages against explicitly supplied clients and settings."""

    def __init__(
        self,
        db: Session,
        settings,
        namespace: NamespaceClient,
        storage: DocumentStoreClient,
    ):
        self.db = db
        self.settings = settings
        self.namespace = namespace
        self.storage = storage
        self.run_repo = SyncRunRepository(db)

    # ------------------------------------------------------------------
    # Single stages
    # ------------------------------------------------------------------

    def sync_folders(self) -> Dict[str, Any]:
        roots = self.settings.get_root_folders()
        if not roots:
            raise ConfigurationMissingError(
                "CLOUDINARY_ROOT_FOLDERS", "No Cloudinary root folders configured"
            )
        stats = FolderImageReconciler(self.db, self.namespace).reconcile(roots)
        return stats.as_dict()

    def build_importer(self, name: str) -> DocumentImporter:
        return IMPORTERS[name].from_settings(self.db, self.storage, self.settings)

    def run_importer(self, name: str) -> ImportResult:
        """Run one document import on its own (the per-document sync endpoints)."""
        return self.build_importer(name).import_document()

    def _stages(self) -> List[Tuple[str, Callable[[], Dict[str, Any]]]]:
        return [
            ("folders", self.sync_folders),
            ("testimonials", lambda: self.run_importer("testimonials").as_dict()),
            ("packages", lambda: self.run_importer("packages").as_dict()),
            ("faqs", lambda: self.run_importer("faqs").as_dict()),
        ]

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def run_sync(self, trigger: str = "manual") -> SyncRun:
        """Run every stage in order and record the run.

        Raises:
            SyncFailedError: at least one stage failed. The run row is already
                committed with status "failed" when this is raised.
        """
        isolate = self.settings.sync_isolate_stages
        run = self.run_repo.start(trigger)
        logger.info("Sync run started", extra={"run_id": run.id, "trigger": trigger, "isolate": isolate})

        results: List[Dict[str, Any]] = []
        failures: List[Dict[str, Any]] = []
        first_error: Optional[Exception] = None

        for stage, execute in self._stages():
            if failures and not isolate:
                results.append({"stage": stage, "status": "skipped"})
                continue
            try:
                outcome = execute()
            except Exception as exc:
                self.db.rollback()
                logger.exception("Sync stage failed", extra={"run_id": run.id, "stage": stage})
                failure = {"stage": stage, "error": str(exc)}
                if isinstance(exc, CatalogException):
                    failure["code"] = exc.error_code.value
                failures.append(failure)
                results.append({"status": "failed", **failure})
                first_error = first_error or exc
            else:
                logger.info("Sync stage complete", extra={"run_id": run.id, "stage": stage})
                results.append({"stage": stage, "status": "ok", "result": outcome})

        if failures:
            failed_stage = failures[0]["stage"]
            self.run_repo.finish(run.id, results, failed_stage=failed_stage, error_message=str(first_error))
            raise SyncFailedError(failed_stage, first_error, failures if isolate else None) from first_error

        run = self.run_repo.finish(run.id, results)
        logger.info("Sync run completed", extra={"run_id": run.id})
        return run

    def list_runs(self, limit: int = 20) -> List[SyncRun]:
        return self.run_repo.get_recent(limit)

    def get_run(self, run_id: str) -> SyncRun:
        return self.run_repo.get_by_id(run_id)
