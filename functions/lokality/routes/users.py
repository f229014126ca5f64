"""
Profile routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from lokality import users
from lokality.auth import Identity, get_identity
from lokality.db import DbClient
from lokality.dependencies import get_db_client, get_storage_client
from lokality.schemas import ProfileUpdateRequest, document
from lokality.storage import StorageClient, Upload

router = APIRouter()

# Only the owner of a profile sees these.
_PRIVATE_FIELDS = ("searchHistory", "searchCriteria")


@router.get("/me")
def get_me(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    """The signed-in user's profile, created as a seeker on first call."""
    return document(users.ensure_profile(db, identity))


@router.patch("/me")
def update_me(
    payload: ProfileUpdateRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
):
    users.ensure_profile(db, identity)
    profile = users.update_profile(
        db, storage, identity.uid, payload.model_dump(exclude_unset=True)
    )
    return document(profile)


@router.post("/me/avatar")
async def upload_avatar(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
):
    users.ensure_profile(db, identity)
    avatar = Upload(
        filename=file.filename or "avatar",
        data=await file.read(),
        content_type=file.content_type or "application/octet-stream",
    )
    profile = users.update_profile(db, storage, identity.uid, {}, avatar=avatar)
    return document(profile)


@router.get("/users/{user_id}")
def get_user(user_id: str, db: DbClient = Depends(get_db_client)):
    data = document(users.get_profile(db, user_id))
    for field_name in _PRIVATE_FIELDS:
        data.pop(field_name, None)
    return data
