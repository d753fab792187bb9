"""
PWAcommerce Backend - Icon Upload Service Unit Tests
======================================================

What we test:
    ✅ A valid square icon is written once per manifest size
    ✅ Extension, emptiness, size, format and shape are all validated
    ✅ remove_icon deletes a whole icon set
"""

import io

import pytest
from PIL import Image

from pwacommerce.exceptions import ValidationError
from pwacommerce.services.upload_service import UploadService


def image_bytes(width: int, height: int, image_format: str = "PNG") -> bytes:
    output = io.BytesIO()
    mode = "RGBA" if image_format == "PNG" else "RGB"
    Image.new(mode, (width, height)).save(output, format=image_format)
    return output.getvalue()


@pytest.fixture
def service(tmp_path):
    return UploadService(storage_root=str(tmp_path), base_url="/uploads/icons")


class TestStoreIcon:

    @pytest.mark.asyncio
    async def test_writes_every_manifest_size(self, service, square_png_bytes):
        base_name, sizes = await service.store_icon("logo.png", square_png_bytes)

        assert base_name.endswith(".png")
        assert sizes == list(UploadService.MANIFEST_SIZES)
        for size in UploadService.MANIFEST_SIZES:
            path = service.icons_dir / f"{size}{base_name}"
            assert path.is_file()
            with Image.open(path) as img:
                assert img.size == (size, size)
                assert img.format == "PNG"
        assert service.get_file_url(f"48{base_name}") == f"/uploads/icons/48{base_name}"

    @pytest.mark.asyncio
    async def test_jpeg_source_is_accepted(self, service):
        base_name, _ = await service.store_icon("logo.jpg", image_bytes(600, 600, "JPEG"))

        assert (service.icons_dir / f"512{base_name}").is_file()

    @pytest.mark.asyncio
    async def test_remove_icon_deletes_the_set(self, service, square_png_bytes):
        base_name, _ = await service.store_icon("logo.png", square_png_bytes)

        service.remove_icon(base_name)

        assert list(service.icons_dir.iterdir()) == []


class TestValidation:

    @pytest.mark.asyncio
    async def test_rejects_unknown_extension(self, service, square_png_bytes):
        with pytest.raises(ValidationError) as exc_info:
            await service.store_icon("logo.gif", square_png_bytes)
        assert exc_info.value.field == "file"

    @pytest.mark.asyncio
    async def test_rejects_empty_file(self, service):
        with pytest.raises(ValidationError, match="empty"):
            await service.store_icon("logo.png", b"")

    @pytest.mark.asyncio
    async def test_rejects_reported_oversize(self, service, square_png_bytes):
        with pytest.raises(ValidationError, match="exceeds"):
            await service.store_icon("logo.png", square_png_bytes, content_length=10**9)

    @pytest.mark.asyncio
    async def test_rejects_non_image_bytes(self, service):
        with pytest.raises(ValidationError, match="not a readable image"):
            await service.store_icon("logo.png", b"definitely not a png")

    @pytest.mark.asyncio
    async def test_rejects_non_square(self, service):
        with pytest.raises(ValidationError, match="square"):
            await service.store_icon("logo.png", image_bytes(640, 512))

    @pytest.mark.asyncio
    async def test_rejects_too_small(self, service):
        with pytest.raises(ValidationError, match="at least 512x512"):
            await service.store_icon("logo.png", image_bytes(256, 256))

    @pytest.mark.asyncio
    async def test_rejects_other_image_formats(self, service):
        with pytest.raises(ValidationError, match="not supported"):
            await service.store_icon("logo.png", image_bytes(512, 512, "GIF"))

    @pytest.mark.asyncio
    async def test_nothing_written_on_rejection(self, service):
        with pytest.raises(ValidationError):
            await service.store_icon("logo.png", image_bytes(100, 100))

        assert not service.icons_dir.exists()
