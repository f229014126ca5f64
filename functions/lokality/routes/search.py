"""
Search routes and per-seeker search history.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from lokality import search as search_service
from lokality.auth import Identity, get_identity, get_optional_identity
from lokality.db import DbClient
from lokality.dependencies import get_db_client
from lokality.schemas import (
    SearchHistoryResponse,
    SearchRequest,
    SearchResponse,
    document,
)
from lokality.search import DateSort, PriceSort, SearchFilters
from lokality.users import get_profile
from shared.types import Property, PropertyStatus, SearchHistoryItem

router = APIRouter()


def _search_response(
    filters: SearchFilters,
    results: list[Property],
    history: Optional[list[SearchHistoryItem]] = None,
) -> SearchResponse:
    return SearchResponse(
        properties=[document(p) for p in results],
        filters=filters.to_stored(),
        description=search_service.describe_search(filters),
        max_price=search_service.max_price(filters.looking_to),
        price_step=search_service.price_step(filters.looking_to),
        search_history=(
            [document(item) for item in history] if history is not None else None
        ),
    )


@router.post("/search", response_model=SearchResponse)
def search(
    payload: SearchRequest,
    identity: Optional[Identity] = Depends(get_optional_identity),
    db: DbClient = Depends(get_db_client),
):
    """
    Runs a search over available listings. Signed-in seekers also get the
    search recorded in their history.
    """
    results = search_service.search(
        db.list_properties(PropertyStatus.AVAILABLE),
        payload.filters,
        price_sort=payload.price_sort,
        date_sort=payload.date_sort,
    )
    history = None
    if identity is not None:
        history = search_service.record_search(
            db, db.get_user(identity.uid), payload.filters
        )
    return _search_response(payload.filters, results, history)


@router.get("/search/history", response_model=SearchHistoryResponse)
def get_history(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    profile = get_profile(db, identity.uid)
    return SearchHistoryResponse(
        search_history=[document(item) for item in profile.search_history]
    )


@router.delete("/search/history", status_code=204)
def clear_history(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    search_service.clear_history(db, identity.uid)


@router.post("/search/history/{index}/replay", response_model=SearchResponse)
def replay_history(
    index: int,
    price_sort: PriceSort = Query("none"),
    date_sort: DateSort = Query("desc"),
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    profile = get_profile(db, identity.uid)
    filters, results, history = search_service.replay_history(
        db, profile, index, price_sort=price_sort, date_sort=date_sort
    )
    return _search_response(filters, results, history)
