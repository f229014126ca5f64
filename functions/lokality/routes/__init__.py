"""
HTTP routes for the Lokality API.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from lokality.auth import Identity, get_identity
from lokality.dependencies import get_storage_client
from lokality.routes import admin, ai, chats, ironing, properties, search, users
from lokality.schemas import HealthResponse, SignUrlResponse
from lokality.storage import StorageClient

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@router.get("/sign-url", response_model=SignUrlResponse)
def sign_url(
    path: str = Query(..., description="Object path in storage"),
    expires_in: int = Query(3600, ge=60, le=86400),
    identity: Identity = Depends(get_identity),
    storage: StorageClient = Depends(get_storage_client),
):
    """Presigned upload URL for a video or avatar under the caller's folder."""
    allowed_prefixes = (f"videos/{identity.uid}/", f"avatars/{identity.uid}/")
    if not path.startswith(allowed_prefixes) or ".." in path:
        raise HTTPException(status_code=403, detail="Upload path not allowed")
    url = storage.presign_put(path, expires_in=expires_in)
    return SignUrlResponse(url=url, path=path)


router.include_router(properties.router)
router.include_router(search.router)
router.include_router(chats.router)
router.include_router(users.router)
router.include_router(ai.router)
router.include_router(ironing.router)
router.include_router(admin.router)
