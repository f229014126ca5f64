"""
Admin routes: listing review queue and user role management.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from lokality import properties, users
from lokality.auth import Identity, get_identity
from lokality.db import DbClient
from lokality.dependencies import get_db_client, get_storage_client
from lokality.schemas import PropertyListResponse, SetRoleRequest, document
from lokality.storage import StorageClient

router = APIRouter(prefix="/admin")


@router.get("/pending", response_model=PropertyListResponse)
def pending(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return PropertyListResponse(
        properties=[document(p) for p in properties.list_pending(db, identity.uid)]
    )


@router.post("/properties/{property_id}/approve")
def approve(
    property_id: str,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(properties.approve(db, identity.uid, property_id))


@router.post("/properties/{property_id}/reject", status_code=204)
def reject(
    property_id: str,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
    storage: StorageClient = Depends(get_storage_client),
):
    properties.reject(db, storage, identity.uid, property_id)


@router.get("/users")
def find_user(
    email: str = Query(..., min_length=3),
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    users.require_admin(db, identity.uid)
    return document(users.find_user_by_email(db, email))


@router.put("/users/{user_id}/role")
def set_role(
    user_id: str,
    payload: SetRoleRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    users.require_admin(db, identity.uid)
    return document(users.set_role(db, user_id, payload.role))
