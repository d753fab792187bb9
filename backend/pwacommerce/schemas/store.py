"""
PWAcommerce Backend - Store, Cart and Admin Schemas
=====================================================

What:  Pydantic models for the per-request options snapshot, checkout line
       items, admin request/response bodies, errors and health.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Store options
# ══════════════════════════════════════════════════════════════════════════


class StoreOptions(BaseModel):
    """
    Read-only snapshot of the `options` table, loaded once per request.

    Every handler and dependency of a request sees the same snapshot; the
    next request loads a fresh one.
    """
    consumer_key: str = Field(default="")
    consumer_secret: str = Field(default="")
    icon: str = Field(default="")

    model_config = {"frozen": True}

    @property
    def has_credentials(self) -> bool:
        """Both REST API credentials are present (non-blank)."""
        return self.consumer_key.strip() != "" and self.consumer_secret.strip() != ""


# ══════════════════════════════════════════════════════════════════════════
# Checkout
# ══════════════════════════════════════════════════════════════════════════


class CartLineItem(BaseModel):
    """A validated entry of the checkout `items` payload."""
    product_id: int
    quantity: int
    variation_id: Optional[int] = None

    model_config = {"frozen": True}


# ══════════════════════════════════════════════════════════════════════════
# Admin
# ══════════════════════════════════════════════════════════════════════════


class SettingsUpdate(BaseModel):
    """Body of PUT /admin/settings; omitted fields are left unchanged."""
    consumer_key: Optional[str] = Field(default=None, max_length=255)
    consumer_secret: Optional[str] = Field(default=None, max_length=255)


class SettingsResponse(BaseModel):
    """Current option state; credentials are reported, never echoed."""
    consumer_key_set: bool
    consumer_secret_set: bool
    icon: str

    @classmethod
    def from_options(cls, options: StoreOptions) -> "SettingsResponse":
        return cls(
            consumer_key_set=options.consumer_key.strip() != "",
            consumer_secret_set=options.consumer_secret.strip() != "",
            icon=options.icon,
        )


class IconUploadResponse(BaseModel):
    icon: str = Field(description="Base file name saved in the icon option")
    sizes: List[int] = Field(description="Pixel sizes written to storage")


# ══════════════════════════════════════════════════════════════════════════
# Errors and health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body produced by the global exception handlers.

    Example:
        {
            "error": "validation_error",
            "message": "Icon must be square",
            "details": {"field": "file"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    credentials: str = Field(description="REST API credentials: configured, missing, unknown")
    uptime_seconds: float = Field(description="Seconds since service started")
