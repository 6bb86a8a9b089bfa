"""Unit tests for SyncService, the four-stage sync orchestrator.

Covers stage order, fail-fast versus isolated stages, and the SyncRun
audit row every run leaves behind.
"""

import pytest

from catalog.exceptions import ConfigurationMissingError, ExternalUnavailableError, SyncFailedError
from catalog.models import Folder, Package, SyncRun, Testimonial
from catalog.services.sync_service import STAGES, SyncService
from tests.conftest import FakeDocumentStore, FakeNamespace, make_asset, make_settings

DOCUMENTS = {
    "testimonials.json": [{
        "heading": "Great", "details": "Lovely photos", "name": "Sam",
        "occasion": "Wedding", "date": "2024-01-01",
    }],
    "packages.json": {"packages": [{"name": "Gold", "priceAUD": 900}], "addons": []},
    "faq.json": {"categories": [{"name": "General", "faqs": [{"question": "Q", "answer": "A"}]}]},
}


def _namespace() -> FakeNamespace:
    return FakeNamespace(
        tree={"Studio": ["Studio/Weddings"]},
        assets={"Studio/Weddings": [make_asset("a1")]},
    )


def _service(db, storage=None, **settings_overrides) -> SyncService:
    return SyncService(
        db,
        make_settings(**settings_overrides),
        _namespace(),
        storage if storage is not None else FakeDocumentStore(DOCUMENTS),
    )


class TestRunSync:

    def test_all_stages_succeed(self, db):
        run = _service(db).run_sync()

        assert run.status == "completed"
        assert run.trigger == "manual"
        assert run.failed_stage is None
        assert run.completed_at is not None
        assert [r["stage"] for r in run.stage_results] == list(STAGES)
        assert all(r["status"] == "ok" for r in run.stage_results)
        assert run.stage_results[0]["result"]["folders_created"] == 2
        assert db.query(Folder).count() == 2
        assert db.query(Testimonial).count() == 1
        assert db.query(Package).count() == 1

    def test_trigger_is_recorded(self, db):
        run = _service(db).run_sync(trigger="scheduled")
        assert run.trigger == "scheduled"

    def test_fail_fast_skips_later_stages(self, db):
        documents = dict(DOCUMENTS)
        del documents["testimonials.json"]

        with pytest.raises(SyncFailedError) as exc_info:
            _service(db, FakeDocumentStore(documents)).run_sync()

        assert exc_info.value.stage == "testimonials"
        assert isinstance(exc_info.value.cause, ExternalUnavailableError)
        assert db.query(Package).count() == 0

        run = db.query(SyncRun).one()
        assert run.status == "failed"
        assert run.failed_stage == "testimonials"
        assert [r["status"] for r in run.stage_results] == ["ok", "failed", "skipped", "skipped"]

    def test_isolated_stages_all_run(self, db):
        documents = dict(DOCUMENTS)
        del documents["testimonials.json"]

        with pytest.raises(SyncFailedError) as exc_info:
            _service(db, FakeDocumentStore(documents), sync_isolate_stages=True).run_sync()

        assert exc_info.value.stage == "testimonials"
        assert [f["stage"] for f in exc_info.value.details["failures"]] == ["testimonials"]
        assert db.query(Package).count() == 1

        run = db.query(SyncRun).one()
        assert [r["status"] for r in run.stage_results] == ["ok", "failed", "ok", "ok"]

    def test_isolated_run_reports_every_failure(self, db):
        with pytest.raises(SyncFailedError) as exc_info:
            _service(db, FakeDocumentStore(), sync_isolate_stages=True).run_sync()

        failures = exc_info.value.details["failures"]
        assert [f["stage"] for f in failures] == ["testimonials", "packages", "faqs"]
        assert all(f["code"] == "EXTERNAL_UNAVAILABLE" for f in failures)

    def test_missing_root_folders_fails_first_stage(self, db):
        with pytest.raises(SyncFailedError) as exc_info:
            _service(db, cloudinary_root_folders="").run_sync()

        assert exc_info.value.stage == "folders"
        assert isinstance(exc_info.value.cause, ConfigurationMissingError)
        assert db.query(Testimonial).count() == 0

    def test_missing_bucket_fails_importer_stage(self, db):
        with pytest.raises(SyncFailedError) as exc_info:
            _service(db, supabase_storage_bucket="").run_sync()

        assert exc_info.value.stage == "testimonials"
        assert exc_info.value.details["cause_code"] == "CONFIGURATION_MISSING"


class TestRunImporter:

    def test_runs_a_single_importer(self, db):
        result = _service(db).run_importer("packages")
        assert result.name == "packages"
        assert result.counts == {"packages": 1}
        assert db.query(SyncRun).count() == 0

    def test_importer_uses_configured_document_name(self, db):
        storage = FakeDocumentStore({"faq-v2.json": DOCUMENTS["faq.json"]})
        _service(db, storage, faq_json_file="faq-v2.json").run_importer("faqs")
        assert storage.downloads == [("content", "faq-v2.json")]


class TestRunHistory:

    def test_list_and_get_runs(self, db):
        service = _service(db)
        first = service.run_sync()
        second = service.run_sync()

        runs = service.list_runs()
        assert {r.id for r in runs} == {first.id, second.id}
        assert service.get_run(first.id).id == first.id
