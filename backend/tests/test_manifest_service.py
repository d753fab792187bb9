"""
PWAcommerce Backend - Manifest Service Unit Tests
===================================================

What we test:
    ✅ Fixed manifest fields come from settings
    ✅ Only sizes with a stored file are listed, ascending
    ✅ No icon option → no icons key in the exported manifest
"""

import pytest

from pwacommerce.config import Settings
from pwacommerce.schemas.store import StoreOptions
from pwacommerce.services.manifest_service import ManifestService
from pwacommerce.services.upload_service import UploadService


@pytest.fixture
def uploads(tmp_path):
    return UploadService(storage_root=str(tmp_path), base_url="https://cdn.shop.test/icons/")


@pytest.fixture
def service(uploads):
    config = Settings(site_url="https://shop.test", home_url="https://shop.test/app", site_name="Demo Store")
    return ManifestService(uploads=uploads, config=config)


class TestBuildManifest:

    def test_fixed_fields(self, service):
        exported = service.build_manifest(StoreOptions()).export()

        assert exported == {
            "name": "Demo Store",
            "short_name": "Demo Store",
            "start_url": "https://shop.test/app",
            "display": "standalone",
            "orientation": "any",
            "theme_color": "#a333c8",
            "background_color": "#a333c8",
        }

    def test_lists_only_existing_sizes_in_order(self, service, uploads):
        uploads.icons_dir.mkdir(parents=True)
        (uploads.icons_dir / "192logo.png").write_bytes(b"png")
        (uploads.icons_dir / "96logo.png").write_bytes(b"png")

        exported = service.build_manifest(StoreOptions(icon="logo.png")).export()

        assert exported["icons"] == [
            {"src": "https://cdn.shop.test/icons/96logo.png", "sizes": "96x96", "type": "image/png"},
            {"src": "https://cdn.shop.test/icons/192logo.png", "sizes": "192x192", "type": "image/png"},
        ]

    def test_icon_option_without_files_gives_empty_list(self, service):
        exported = service.build_manifest(StoreOptions(icon="missing.png")).export()

        assert exported["icons"] == []

    def test_no_icon_option_omits_icons_key(self, service, uploads):
        uploads.icons_dir.mkdir(parents=True)
        (uploads.icons_dir / "96logo.png").write_bytes(b"png")

        exported = service.build_manifest(StoreOptions(icon="")).export()

        assert "icons" not in exported


class TestGetFileUrl:

    def test_missing_file_resolves_to_empty(self, uploads):
        assert uploads.get_file_url("48nothing.png") == ""

    @pytest.mark.parametrize("name", ["", "../secret.png", "a/b.png", "a\\b.png"])
    def test_names_outside_icons_dir_are_rejected(self, uploads, name):
        assert uploads.get_file_url(name) == ""
