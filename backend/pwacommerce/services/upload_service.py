"""
PWAcommerce Backend - Icon Upload Service
===========================================

What:  Stores the app icon in every manifest size and resolves stored icon
       file names to public URLs.
How:   An uploaded image is validated (extension, size, real image format),
       resized with Pillow into one PNG per manifest size and written with
       aiofiles under {storage_root}/icons.
Who:   The admin icon route uploads; ManifestService resolves URLs.

Storage layout (icon option = "3f2a9c01b7de.png"):
    storage/
    └── icons/
        ├── 483f2a9c01b7de.png
        ├── 723f2a9c01b7de.png
        ├── ...
        └── 5123f2a9c01b7de.png

    A sized file name is the pixel size immediately followed by the base
    name; get_file_url() is asked for exactly that string.
"""

import asyncio
import io
import logging
import uuid
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import aiofiles
from PIL import Image, UnidentifiedImageError

from pwacommerce.config import settings
from pwacommerce.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg"}

# Pillow format names accepted as icon sources
ALLOWED_FORMATS = {"PNG", "JPEG"}


class UploadService:

    # Icon sizes listed in the manifest, ascending
    MANIFEST_SIZES: Tuple[int, ...] = (48, 72, 96, 128, 144, 152, 192, 384, 512)

    def __init__(self, storage_root: Optional[str] = None, base_url: Optional[str] = None):
        self.icons_dir = Path(storage_root or settings.storage_root).resolve() / "icons"
        self.base_url = (base_url if base_url is not None else settings.uploads_base_url).rstrip("/")

    # ── URL resolution ────────────────────────────────────────────────────

    def get_file_url(self, filename: str) -> str:
        """
        Public URL of a stored icon file, or "" when no such file exists.

        Names that could leave the icons directory always resolve to "".
        """
        if not filename or "/" in filename or "\\" in filename or ".." in filename:
            return ""
        if not (self.icons_dir / filename).is_file():
            return ""
        return f"{self.base_url}/{filename}"

    # ── Validation ────────────────────────────────────────────────────────

    def validate_extension(self, filename: str) -> str:
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="file",
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        max_mb = settings.max_file_size / (1024 * 1024)

        if actual_size == 0:
            raise ValidationError(message="Uploaded file is empty.", field="file")

        if content_length and content_length > settings.max_file_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB. Please upload a smaller image.",
                field="file",
                context={"max_size_mb": max_mb, "reported_size": content_length},
            )

        if actual_size > settings.max_file_size:
            raise ValidationError(
                message=f"File size ({actual_size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size_mb": max_mb, "actual_size": actual_size},
            )

    def validate_image(self, content: bytes) -> Tuple[str, int, int]:
        """
        Check the bytes really are a PNG or JPEG large enough for every size.

        Returns:
            (format, width, height) as reported by Pillow.
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                img.verify()
            # verify() leaves the image unusable; reopen to read its header
            with Image.open(io.BytesIO(content)) as img:
                image_format, (width, height) = img.format, img.size
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ValidationError(
                message="The file is not a readable image.",
                field="file",
                context={"error": str(e)},
            )

        if image_format not in ALLOWED_FORMATS:
            raise ValidationError(
                message=f"Image format '{image_format}' is not supported. Upload a PNG or JPEG.",
                field="file",
                context={"detected_format": image_format},
            )

        largest = self.MANIFEST_SIZES[-1]
        if width != height:
            raise ValidationError(
                message=f"Icon must be square; got {width}x{height}.",
                field="file",
                context={"width": width, "height": height},
            )
        if width < largest:
            raise ValidationError(
                message=f"Icon must be at least {largest}x{largest}; got {width}x{height}.",
                field="file",
                context={"width": width, "height": height, "minimum": largest},
            )

        return image_format, width, height

    # ── Storage ───────────────────────────────────────────────────────────

    def _render_sizes(self, content: bytes) -> Dict[int, bytes]:
        """Resize the source once per manifest size; PNG bytes per size."""
        rendered: Dict[int, bytes] = {}
        with Image.open(io.BytesIO(content)) as img:
            source = img.convert("RGBA")
            for size in self.MANIFEST_SIZES:
                output = io.BytesIO()
                source.resize((size, size), Image.Resampling.LANCZOS).save(output, format="PNG", optimize=True)
                rendered[size] = output.getvalue()
        return rendered

    async def _write(self, path: Path, data: bytes) -> None:
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

    async def store_icon(
        self,
        filename: str,
        content: bytes,
        content_length: Optional[int] = None,
    ) -> Tuple[str, List[int]]:
        """
        Validate an uploaded icon and write every manifest size.

        Returns:
            (base_name, sizes) where base_name is the value to save in the
            icon option and sizes lists the pixel sizes written.

        Raises:
            ValidationError: wrong extension, size, format or shape
            FileStorageError: the icons directory could not be written
        """
        self.validate_extension(filename)
        self.validate_size(content_length, len(content))
        self.validate_image(content)

        base_name = f"{uuid.uuid4().hex[:12]}.png"
        rendered = await asyncio.to_thread(self._render_sizes, content)

        written: List[Path] = []
        try:
            self.icons_dir.mkdir(parents=True, exist_ok=True)
            for size, data in rendered.items():
                path = self.icons_dir / f"{size}{base_name}"
                await self._write(path, data)
                written.append(path)
        except OSError as e:
            logger.error("Failed to store icon set %s: %s", base_name, str(e))
            for path in written:
                path.unlink(missing_ok=True)
            raise FileStorageError(
                message="Failed to save the uploaded icon. Please try again.",
                context={"icons_dir": str(self.icons_dir), "os_error": str(e)},
            )

        logger.info("Icon set stored: %s (%d sizes)", base_name, len(written))
        return base_name, list(rendered)

    def remove_icon(self, base_name: str) -> None:
        """Delete every sized file of an icon set; missing files are ignored."""
        if not base_name:
            return
        for size in self.MANIFEST_SIZES:
            path = self.icons_dir / f"{size}{base_name}"
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Failed to remove old icon %s: %s", path.name, str(e))


upload_service = UploadService()
