"""
PWAcommerce Backend - Manifest Service
========================================

What:  Builds the web app manifest from deployment settings and the icon
       option.
How:   Icons are listed only for the sizes whose file the upload resolver
       can find, in the resolver's ascending size order. No icon option
       means no icons key at all.
"""

import logging
from typing import List, Optional

from pwacommerce.config import Settings, settings as default_settings
from pwacommerce.schemas.manifest import Manifest, ManifestIcon
from pwacommerce.schemas.store import StoreOptions
from pwacommerce.services.upload_service import UploadService, upload_service

logger = logging.getLogger(__name__)

THEME_COLOR = "#a333c8"


class ManifestService:

    def __init__(
        self,
        uploads: Optional[UploadService] = None,
        config: Optional[Settings] = None,
    ):
        self.uploads = uploads or upload_service
        self.config = config or default_settings

    def build_icons(self, icon: str) -> List[ManifestIcon]:
        icons = []
        for size in self.uploads.MANIFEST_SIZES:
            src = self.uploads.get_file_url(f"{size}{icon}")
            if src:
                icons.append(ManifestIcon(src=src, sizes=f"{size}x{size}", type="image/png"))
        return icons

    def build_manifest(self, options: StoreOptions) -> Manifest:
        manifest = Manifest(
            name=self.config.site_name,
            short_name=self.config.site_name,
            start_url=self.config.start_url,
            display="standalone",
            orientation="any",
            theme_color=THEME_COLOR,
            background_color=THEME_COLOR,
        )

        if options.icon:
            manifest.icons = self.build_icons(options.icon)
            logger.debug("Manifest lists %d icon sizes for %s", len(manifest.icons), options.icon)

        return manifest


manifest_service = ManifestService()
