"""Unit tests for FolderImageReconciler, the Cloudinary -> catalog mirror.

Runs against the in-memory database with FakeNamespace in place of
Cloudinary. Covers idempotence, walk order, cover detection, asset paging,
degraded sub-folder listing and the folder insert race.
"""

import pytest

from catalog.exceptions import ConstraintConflictError, ExternalUnavailableError
from catalog.models import Folder, FolderHierarchy, Image
from catalog.services.reconcile_service import (
    FolderImageReconciler,
    is_cover_asset,
)
from tests.conftest import FakeNamespace, make_asset


def _studio_namespace() -> FakeNamespace:
    return FakeNamespace(
        tree={
            "Studio": ["Studio/Weddings", "Studio/Events"],
            "Studio/Events": ["Studio/Events/Covers"],
        },
        assets={
            "Studio/Weddings": [make_asset("a1"), make_asset("a2")],
            "Studio/Events/Covers": [
                make_asset(
                    "c1",
                    display_name="Covers/COVER_shot.jpg",
                    context={"event_name": "Reunion", "event_date": "2024-05-01"},
                ),
            ],
        },
    )


def _folder(db, path) -> Folder:
    return db.query(Folder).filter(Folder.cloudinary_path == path).one()


class TestIsCoverAsset:

    @pytest.mark.parametrize("name", ["cover.jpg", "Cover", "Covers/COVER_shot.jpg", "a/b/coverage"])
    def test_cover_names(self, name):
        assert is_cover_asset(name) is True

    @pytest.mark.parametrize("name", [None, "", "discover.jpg", "covers/shot.jpg", "my cover.jpg"])
    def test_non_cover_names(self, name):
        assert is_cover_asset(name) is False


class TestReconcile:

    def test_mirrors_folders_edges_and_images(self, db):
        stats = FolderImageReconciler(db, _studio_namespace()).reconcile(["Studio"])

        assert db.query(Folder).count() == 4
        assert db.query(FolderHierarchy).count() == 3
        assert db.query(Image).count() == 3
        assert stats.folders_visited == 4
        assert stats.folders_created == 4
        assert stats.edges_created == 3
        assert stats.images_inserted == 3

        weddings = _folder(db, "Studio/Weddings")
        assert weddings.name == "Weddings"
        assert {img.cloudinary_asset_id for img in weddings.images} == {"a1", "a2"}

    def test_root_has_no_parent_edge(self, db):
        FolderImageReconciler(db, _studio_namespace()).reconcile(["Studio"])
        root = _folder(db, "Studio")
        assert db.query(FolderHierarchy).filter(FolderHierarchy.folder_id == root.id).count() == 0

    def test_second_run_is_a_no_op(self, db):
        namespace = _studio_namespace()
        FolderImageReconciler(db, namespace).reconcile(["Studio"])
        ids_before = {f.cloudinary_path: f.id for f in db.query(Folder).all()}

        stats = FolderImageReconciler(db, namespace).reconcile(["Studio"])

        assert stats.folders_created == 0
        assert stats.edges_created == 0
        assert stats.images_inserted == 0
        assert stats.images_skipped == 3
        assert {f.cloudinary_path: f.id for f in db.query(Folder).all()} == ids_before
        assert db.query(FolderHierarchy).count() == 3
        assert db.query(Image).count() == 3

    def test_new_asset_is_added_on_rerun(self, db):
        namespace = _studio_namespace()
        FolderImageReconciler(db, namespace).reconcile(["Studio"])

        namespace.assets["Studio/Weddings"].append(make_asset("a3"))
        stats = FolderImageReconciler(db, namespace).reconcile(["Studio"])

        assert stats.images_inserted == 1
        assert db.query(Image).count() == 4

    def test_walk_is_depth_first_pre_order(self, db):
        namespace = FakeNamespace(tree={
            "Studio": ["Studio/A", "Studio/B"],
            "Studio/A": ["Studio/A/X"],
        })
        FolderImageReconciler(db, namespace).reconcile(["Studio"])
        assert namespace.subfolder_calls == ["Studio", "Studio/A", "Studio/A/X", "Studio/B"]

    def test_multiple_roots(self, db):
        namespace = FakeNamespace(tree={"Studio": ["Studio/A"], "Archive": []})
        FolderImageReconciler(db, namespace).reconcile(["Studio", "Archive"])
        assert {f.cloudinary_path for f in db.query(Folder).all()} == {"Studio", "Studio/A", "Archive"}

    def test_empty_folder_still_gets_a_row(self, db):
        FolderImageReconciler(db, FakeNamespace()).reconcile(["Studio/Empty"])
        folder = _folder(db, "Studio/Empty")
        assert folder.name == "Empty"
        assert folder.is_event_folder is False

    def test_deep_tree_mirrors_every_folder(self, db):
        paths = ["Root"]
        for i in range(200):
            paths.append(f"{paths[-1]}/d{i}")
        tree = {parent: [child] for parent, child in zip(paths, paths[1:])}
        deepest = paths[-1]

        FolderImageReconciler(
            db, FakeNamespace(tree=tree, assets={deepest: [make_asset("deep")]})
        ).reconcile(["Root"])

        assert db.query(Folder).count() == len(paths)
        assert db.query(FolderHierarchy).count() == len(paths) - 1
        assert db.query(Image).one().folder_id == _folder(db, deepest).id

    def test_cyclic_listing_terminates(self, db):
        namespace = FakeNamespace(tree={"Root": ["Root/A"], "Root/A": ["Root"]})

        stats = FolderImageReconciler(db, namespace).reconcile(["Root"])

        assert stats.folders_visited == 2
        assert {f.cloudinary_path for f in db.query(Folder).all()} == {"Root", "Root/A"}


class TestCoverDetection:

    def test_cover_asset_flags_folder_with_event_metadata(self, db):
        FolderImageReconciler(db, _studio_namespace()).reconcile(["Studio"])

        covers = _folder(db, "Studio/Events/Covers")
        assert covers.is_event_folder is True
        assert covers.event_name == "Reunion"
        assert covers.event_date == "2024-05-01"
        assert _folder(db, "Studio/Weddings").is_event_folder is False

    def test_cover_without_context_sets_nulls(self, db):
        namespace = FakeNamespace(assets={"Gala": [make_asset("c1", display_name="cover.png")]})
        stats = FolderImageReconciler(db, namespace).reconcile(["Gala"])

        gala = _folder(db, "Gala")
        assert gala.is_event_folder is True
        assert gala.event_name is None
        assert gala.event_date is None
        assert stats.event_folders_flagged == 1

    def test_flag_survives_failed_image_insert(self, db, monkeypatch):
        namespace = FakeNamespace(assets={"Gala": [make_asset("c1", display_name="cover.png")]})
        reconciler = FolderImageReconciler(db, namespace)

        def _conflict(**kwargs):
            raise ConstraintConflictError("images", kwargs["asset_id"])

        monkeypatch.setattr(reconciler.image_repo, "insert", _conflict)

        with pytest.raises(ConstraintConflictError):
            reconciler.reconcile(["Gala"])
        db.rollback()

        assert _folder(db, "Gala").is_event_folder is True
        assert db.query(Image).count() == 0


class TestAssetPaging:

    def test_pages_until_cursor_is_empty(self, db):
        assets = [make_asset(f"a{i}") for i in range(5)]
        namespace = FakeNamespace(assets={"Studio": assets}, page_size=2)

        FolderImageReconciler(db, namespace).reconcile(["Studio"])

        assert namespace.asset_calls == [("Studio", None), ("Studio", "2"), ("Studio", "4")]
        assert db.query(Image).count() == 5

    def test_paging_failure_is_fatal(self, db):
        namespace = _studio_namespace()
        namespace.failing_asset_folders.add("Studio/Weddings")

        with pytest.raises(ExternalUnavailableError):
            FolderImageReconciler(db, namespace).reconcile(["Studio"])

        # Work committed before the failure stays.
        assert db.query(Folder).filter(Folder.cloudinary_path == "Studio").count() == 1

    def test_unreadable_subfolders_are_treated_as_leaf(self, db):
        namespace = _studio_namespace()
        namespace.unreadable_folders.add("Studio/Events")
        namespace.assets["Studio/Events"] = [make_asset("e1")]

        FolderImageReconciler(db, namespace).reconcile(["Studio"])

        paths = {f.cloudinary_path for f in db.query(Folder).all()}
        assert "Studio/Events" in paths
        assert "Studio/Events/Covers" not in paths
        assert db.query(Image).filter(Image.cloudinary_asset_id == "e1").count() == 1


class TestUpsertFolder:

    def test_returns_existing_id(self, db):
        reconciler = FolderImageReconciler(db, FakeNamespace())
        first = reconciler.upsert_folder("Studio")
        assert reconciler.upsert_folder("Studio") == first
        assert db.query(Folder).count() == 1

    def test_duplicate_edge_is_ignored(self, db):
        reconciler = FolderImageReconciler(db, FakeNamespace())
        parent = reconciler.upsert_folder("Studio")
        reconciler.upsert_folder("Studio/A", parent)
        reconciler.upsert_folder("Studio/A", parent)
        assert db.query(FolderHierarchy).count() == 1

    def test_losing_concurrent_insert_reuses_winner(self, db, monkeypatch):
        reconciler = FolderImageReconciler(db, FakeNamespace())
        winner_id = reconciler.upsert_folder("Studio")

        # The lookup misses as if another writer inserted right after it.
        real_get_by_path = reconciler.folder_repo.get_by_path
        calls = []

        def _racing_get_by_path(path):
            calls.append(path)
            return None if len(calls) == 1 else real_get_by_path(path)

        monkeypatch.setattr(reconciler.folder_repo, "get_by_path", _racing_get_by_path)

        assert reconciler.upsert_folder("Studio") == winner_id
        assert db.query(Folder).count() == 1
