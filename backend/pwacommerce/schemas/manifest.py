"""
PWAcommerce Backend - Web App Manifest Schemas
================================================

What:  Shape of the manifest served by GET /pwacommerce/export-manifest.
Who:   Built by services/manifest_service.py; read by browsers installing the
       progressive web app.

Example:
    {
        "name": "My Shop",
        "short_name": "My Shop",
        "start_url": "https://shop.example.com",
        "display": "standalone",
        "orientation": "any",
        "theme_color": "#a333c8",
        "background_color": "#a333c8",
        "icons": [
            {"src": ".../96logo.png", "sizes": "96x96", "type": "image/png"}
        ]
    }
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ManifestIcon(BaseModel):
    src: str = Field(description="Public URL of the resized icon")
    sizes: str = Field(description="Pixel size as 'NxN'")
    type: str = Field(default="image/png")


class Manifest(BaseModel):
    name: str
    short_name: str
    start_url: str
    display: str = Field(default="standalone")
    orientation: str = Field(default="any")
    theme_color: str = Field(default="#a333c8")
    background_color: str = Field(default="#a333c8")

    # None (key omitted on export) when no icon has been uploaded
    icons: Optional[List[ManifestIcon]] = Field(default=None)

    def export(self) -> dict:
        """Manifest as plain JSON data, without the icons key if unset."""
        return self.model_dump(exclude_none=True)
