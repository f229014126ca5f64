"""
Listing routes: reels feed, property CRUD and shortlists.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from lokality import properties
from lokality.auth import Identity, get_identity, get_optional_identity
from lokality.db import DbClient
from lokality.dependencies import get_db_client, get_storage_client
from lokality.schemas import (
    PropertyForm,
    PropertyListResponse,
    ShortlistRequest,
    document,
)
from lokality.storage import StorageClient, Upload

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_form(payload: str) -> PropertyForm:
    try:
        return PropertyForm.model_validate_json(payload)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


async def _read_upload(file: UploadFile | None) -> Upload | None:
    if file is None or not file.filename:
        return None
    return Upload(
        filename=file.filename,
        data=await file.read(),
        content_type=file.content_type or "application/octet-stream",
    )


@router.get("/reels", response_model=PropertyListResponse)
def reels(db: DbClient = Depends(get_db_client)):
    """Available listings for the vertical video feed, newest first."""
    return PropertyListResponse(
        properties=[document(p) for p in properties.reels_feed(db)]
    )


@router.post("/properties/shortlisted", response_model=PropertyListResponse)
def shortlisted(payload: ShortlistRequest, db: DbClient = Depends(get_db_client)):
    found = properties.get_shortlisted(db, payload.property_ids)
    return PropertyListResponse(properties=[document(p) for p in found])


@router.get("/properties/{property_id}")
def get_property(
    property_id: str,
    identity: Optional[Identity] = Depends(get_optional_identity),
    db: DbClient = Depends(get_db_client),
):
    viewer_id = identity.uid if identity is not None else None
    return document(properties.view_property(db, property_id, viewer_id))


@router.get("/users/{user_id}/properties", response_model=PropertyListResponse)
def user_properties(user_id: str, db: DbClient = Depends(get_db_client)):
    return PropertyListResponse(
        properties=[document(p) for p in properties.listings_by(db, user_id)]
    )


@router.post("/properties", status_code=201)
async def create_property(
    payload: str = Form(..., description="Property form as JSON"),
    video: UploadFile | None = File(None),
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
):
    form = _parse_form(payload)
    upload = await _read_upload(video)
    created = properties.create_property(db, storage, identity, form, upload)
    return document(created)


@router.put("/properties/{property_id}")
async def update_property(
    property_id: str,
    payload: str = Form(..., description="Property form as JSON"),
    video: UploadFile | None = File(None),
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
):
    form = _parse_form(payload)
    upload = await _read_upload(video)
    updated = properties.update_property(
        db, storage, identity.uid, property_id, form, upload
    )
    return document(updated)


@router.delete("/properties/{property_id}", status_code=204)
def delete_property(
    property_id: str,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
):
    properties.delete_property(db, storage, identity.uid, property_id)


@router.post("/properties/{property_id}/occupied")
def mark_occupied(
    property_id: str,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(properties.mark_occupied(db, identity.uid, property_id))
