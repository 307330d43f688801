"""Unit tests for QueryService: the joins and the search predicate.

Runs against MemStorage directly, bypassing the HTTP stack.
"""

import pytest

from garage.exceptions import OrphanedReferenceError
from garage.schemas import AssetCreate, FileType, FolderCreate, ToolkitCreate
from garage.services import QueryService
from garage.services.query_service import matches_search
from tests.conftest import make_asset


def _asset(storage, name="logo.png", **overrides):
    return storage.create_asset(AssetCreate.model_validate(make_asset(name, **overrides)))


@pytest.fixture()
def toolkit(storage):
    return storage.create_toolkit(ToolkitCreate(name="Brand Kit"), user_id=1)


class TestAssetJoins:

    def test_asset_with_details_attaches_related_rows(self, storage, toolkit):
        folder = storage.create_folder(FolderCreate(name="Logos", toolkit_id=toolkit.id))
        asset = _asset(storage, toolkit_id=toolkit.id, folderId=folder.id)

        detailed = QueryService(storage).get_asset(asset.id)
        assert detailed.toolkit.name == "Brand Kit"
        assert detailed.folder.name == "Logos"
        assert detailed.user.username == "admin"

    def test_asset_without_folder_has_null_folder(self, storage, toolkit):
        asset = _asset(storage, toolkit_id=toolkit.id)
        assert QueryService(storage).get_asset(asset.id).folder is None

    def test_get_asset_missing_returns_none(self, storage):
        assert QueryService(storage).get_asset(42) is None

    def test_get_assets_filters_by_folder(self, storage, toolkit):
        folder = storage.create_folder(FolderCreate(name="Logos", toolkit_id=toolkit.id))
        _asset(storage, "a.png", toolkit_id=toolkit.id, folderId=folder.id)
        _asset(storage, "b.png", toolkit_id=toolkit.id)

        svc = QueryService(storage)
        assert [a.name for a in svc.get_assets(toolkit.id)] == ["a.png", "b.png"]
        assert [a.name for a in svc.get_assets(toolkit.id, folder.id)] == ["a.png"]

    def test_deleted_toolkit_is_an_orphaned_reference(self, storage, toolkit):
        asset = _asset(storage, toolkit_id=toolkit.id)
        storage.delete_toolkit(toolkit.id)

        with pytest.raises(OrphanedReferenceError) as exc_info:
            QueryService(storage).get_asset(asset.id)
        assert exc_info.value.details["field"] == "toolkit_id"
        assert exc_info.value.status_code == 500

    def test_deleted_folder_is_an_orphaned_reference(self, storage, toolkit):
        folder = storage.create_folder(FolderCreate(name="Logos", toolkit_id=toolkit.id))
        asset = _asset(storage, toolkit_id=toolkit.id, folderId=folder.id)
        storage.delete_folder(folder.id)

        with pytest.raises(OrphanedReferenceError):
            QueryService(storage).get_asset(asset.id)


class TestSearch:

    def test_query_matches_name_case_insensitively(self, storage, toolkit):
        _asset(storage, "Company-LOGO.png", toolkit_id=toolkit.id)
        _asset(storage, "banner.png", toolkit_id=toolkit.id)

        hits = QueryService(storage).search_assets(1, "logo")
        assert [a.name for a in hits] == ["Company-LOGO.png"]

    def test_query_matches_tags(self, storage, toolkit):
        _asset(storage, "a.png", toolkit_id=toolkit.id, tags=["Hero-Image"])
        hits = QueryService(storage).search_assets(1, "hero")
        assert len(hits) == 1

    def test_file_type_filter(self, storage, toolkit):
        _asset(storage, "logo.png", toolkit_id=toolkit.id)
        _asset(storage, "logo.mp3", toolkit_id=toolkit.id, fileType="audio", mimeType="audio/mpeg")

        hits = QueryService(storage).search_assets(1, "logo", file_type=FileType.AUDIO)
        assert [a.name for a in hits] == ["logo.mp3"]

    def test_tag_filter_needs_one_exact_tag(self, storage, toolkit):
        _asset(storage, "logo-a.png", toolkit_id=toolkit.id, tags=["brand"])
        _asset(storage, "logo-b.png", toolkit_id=toolkit.id, tags=["branding"])

        hits = QueryService(storage).search_assets(1, "logo", tags=["brand", "print"])
        assert [a.name for a in hits] == ["logo-a.png"]

    def test_search_is_scoped_to_owner(self, storage, toolkit):
        _asset(storage, "logo.png", toolkit_id=toolkit.id, user_id=2)
        assert QueryService(storage).search_assets(1, "logo") == []


class TestMatchesSearch:

    def test_empty_query_matches_everything(self, storage, toolkit):
        asset = _asset(storage, toolkit_id=toolkit.id)
        assert matches_search(asset, "") is True

    def test_original_name_is_searched(self, storage, toolkit):
        asset = _asset(storage, "renamed.png", toolkit_id=toolkit.id, originalName="IMG_0042.png")
        assert matches_search(asset, "img_00") is True


class TestToolkitViews:

    def test_new_toolkit_has_no_folders_and_no_assets(self, storage, toolkit):
        view = QueryService(storage).get_toolkit(toolkit.id)
        assert view.folders == []
        assert view.asset_count == 0

    def test_toolkit_view_counts_assets_and_lists_folders(self, storage, toolkit):
        storage.create_folder(FolderCreate(name="Logos", toolkit_id=toolkit.id))
        _asset(storage, "a.png", toolkit_id=toolkit.id)
        _asset(storage, "b.png", toolkit_id=toolkit.id)

        view = QueryService(storage).get_toolkit(toolkit.id)
        assert [f.name for f in view.folders] == ["Logos"]
        assert view.asset_count == 2

    def test_get_toolkits_lists_owner_toolkits(self, storage, toolkit):
        storage.create_toolkit(ToolkitCreate(name="Other"), user_id=2)
        views = QueryService(storage).get_toolkits(1)
        assert [v.name for v in views] == ["Brand Kit"]
