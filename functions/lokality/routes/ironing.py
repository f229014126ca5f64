"""
Ironing service routes: customer ordering and the provider dashboard.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lokality import ironing
from lokality.auth import Identity, get_identity
from lokality.db import DbClient
from lokality.dependencies import get_db_client
from lokality.schemas import (
    AdvanceOrderRequest,
    EstimatedDeliveryRequest,
    ItemPriceRequest,
    OrderListResponse,
    PlaceOrderRequest,
    PriceListRequest,
    PriceListResponse,
    document,
)
from shared.types import IroningAddress, IroningOrderItem, IroningPriceItem

router = APIRouter(prefix="/ironing")


@router.get("/prices", response_model=PriceListResponse)
def get_prices(db: DbClient = Depends(get_db_client)):
    return PriceListResponse(
        items=[document(item) for item in ironing.get_price_list(db)]
    )


@router.put("/prices", response_model=PriceListResponse)
def update_prices(
    payload: PriceListRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    items = [IroningPriceItem(**item.model_dump()) for item in payload.items]
    saved = ironing.update_price_list(db, identity.uid, items)
    return PriceListResponse(items=[document(item) for item in saved])


@router.post("/orders", status_code=201)
def place_order(
    payload: PlaceOrderRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    order = ironing.place_order(
        db,
        identity,
        [IroningOrderItem(**item.model_dump()) for item in payload.items],
        IroningAddress(**payload.address.model_dump()),
    )
    return document(order)


@router.get("/orders", response_model=OrderListResponse)
def list_orders(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    """All orders for the provider dashboard, newest first."""
    orders = ironing.list_all_orders(db, identity.uid)
    return OrderListResponse(orders=[document(order) for order in orders])


@router.get("/my-orders", response_model=OrderListResponse)
def my_orders(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    orders = ironing.list_user_orders(db, identity.uid)
    return OrderListResponse(orders=[document(order) for order in orders])


@router.get("/profile")
def get_profile(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(ironing.get_ironing_profile(db, identity.uid))


@router.post("/orders/{order_id}/advance")
def advance_order(
    order_id: str,
    payload: AdvanceOrderRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(
        ironing.advance_order(db, identity.uid, order_id, payload.status)
    )


@router.put("/orders/{order_id}/delivery")
def set_delivery(
    order_id: str,
    payload: EstimatedDeliveryRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(
        ironing.set_estimated_delivery(
            db, identity.uid, order_id, payload.estimated_delivery
        )
    )


@router.put("/orders/{order_id}/items/{index}")
def update_item_price(
    order_id: str,
    index: int,
    payload: ItemPriceRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(
        ironing.update_item_price(db, identity.uid, order_id, index, payload.price)
    )
