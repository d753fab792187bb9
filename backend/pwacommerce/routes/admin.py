"""
PWAcommerce Backend - Admin Route Handlers
============================================

What:  Store options management: REST credentials and the app icon.
How:   Every endpoint requires the X-Admin-Key header; without an
       ADMIN_API_KEY configured the whole router answers 404.

Route Inventory:
    GET  /admin/settings   which options are set (credentials never echoed)
    PUT  /admin/settings   update consumer key and/or secret
    POST /admin/icon       upload a square PNG/JPEG (≥512px) as the app icon
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from pwacommerce.database import get_db_session
from pwacommerce.exceptions import DatabaseError, ValidationError
from pwacommerce.routes.dependencies import get_store_options, require_admin
from pwacommerce.schemas.store import (
    ErrorResponse,
    IconUploadResponse,
    SettingsResponse,
    SettingsUpdate,
    StoreOptions,
)
from pwacommerce.services.options_service import options_service
from pwacommerce.services.upload_service import upload_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses={403: {"description": "Invalid admin key", "model": ErrorResponse}},
)


@router.get("/settings", response_model=SettingsResponse, summary="Current store options")
async def read_settings(
    options: StoreOptions = Depends(get_store_options),
) -> SettingsResponse:
    return SettingsResponse.from_options(options)


@router.put(
    "/settings",
    response_model=SettingsResponse,
    responses={400: {"description": "Nothing to update", "model": ErrorResponse}},
    summary="Update the REST API credentials",
)
async def update_settings(
    body: SettingsUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> SettingsResponse:
    if body.consumer_key is None and body.consumer_secret is None:
        raise ValidationError(message="Provide consumer_key and/or consumer_secret.")

    options = await options_service.update_settings(
        db,
        consumer_key=body.consumer_key,
        consumer_secret=body.consumer_secret,
    )
    return SettingsResponse.from_options(options)


@router.post(
    "/icon",
    status_code=201,
    response_model=IconUploadResponse,
    responses={400: {"description": "Invalid image", "model": ErrorResponse}},
    summary="Upload the app icon",
)
async def upload_icon(
    file: UploadFile = File(..., description="Square PNG or JPEG, at least 512x512"),
    db: AsyncSession = Depends(get_db_session),
    options: StoreOptions = Depends(get_store_options),
) -> IconUploadResponse:
    content = await file.read()
    logger.info("Received icon upload: filename=%s, size=%d bytes", file.filename or "unknown", len(content))

    try:
        base_name, sizes = await upload_service.store_icon(
            filename=file.filename or "icon.png",
            content=content,
            content_length=file.size,
        )
    finally:
        await file.close()

    # set_icon commits; the old set is removed only after that succeeds
    try:
        await options_service.set_icon(db, base_name)
    except DatabaseError:
        upload_service.remove_icon(base_name)
        raise

    if options.icon and options.icon != base_name:
        upload_service.remove_icon(options.icon)

    return IconUploadResponse(icon=base_name, sizes=sizes)
