"""Tests for the scheduled sync worker's single-run entry point."""

import pytest

import worker
from catalog.database import SessionLocal
from catalog.models import SyncRun
from tests.conftest import FakeDocumentStore, FakeNamespace, make_settings


@pytest.fixture(autouse=True)
def _worker_settings(monkeypatch):
    monkeypatch.setattr(worker, "settings", make_settings())


def _latest_run() -> SyncRun:
    session = SessionLocal()
    try:
        return session.query(SyncRun).one()
    finally:
        session.close()


class TestRunOnce:

    def test_successful_run_is_recorded_as_scheduled(self):
        storage = FakeDocumentStore({
            "testimonials.json": [],
            "packages.json": {"packages": []},
            "faq.json": {"categories": []},
        })

        assert worker.run_once(FakeNamespace(), storage) is True

        run = _latest_run()
        assert run.trigger == "scheduled"
        assert run.status == "completed"

    def test_failed_run_returns_false(self):
        assert worker.run_once(FakeNamespace(), FakeDocumentStore()) is False

        run = _latest_run()
        assert run.status == "failed"
        assert run.failed_stage == "testimonials"
