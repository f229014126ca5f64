"""
Ironing service: price list, order placement and the provider dashboard.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from lokality.auth import Identity
from lokality.db import DbClient
from lokality.exceptions import NotFoundError, ValidationError
from lokality.users import require_service_provider
from shared.constants import DEFAULT_CLOTHES_PRICES
from shared.types import (
    IroningAddress,
    IroningOrder,
    IroningOrderItem,
    IroningOrderStatus,
    IroningPriceItem,
    IroningProfile,
    StatusUpdate,
)
from shared.utils import parse_timestamp, utc_now

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

_STATUS_FLOW = [
    IroningOrderStatus.PLACED,
    IroningOrderStatus.PICKED_UP,
    IroningOrderStatus.PROCESSING,
    IroningOrderStatus.OUT_FOR_DELIVERY,
    IroningOrderStatus.COMPLETED,
]


def default_price_list() -> List[IroningPriceItem]:
    return [
        IroningPriceItem(name=name, price=price, category=category)
        for name, price, category in DEFAULT_CLOTHES_PRICES
    ]


def get_price_list(db: DbClient) -> List[IroningPriceItem]:
    """Stored price list; the defaults are written on first read."""
    items = db.get_price_list()
    if items is None:
        items = default_price_list()
        db.save_price_list(items)
        logger.info("Initialized ironing price list with defaults")
    return items


def update_price_list(
    db: DbClient, user_id: str, items: List[IroningPriceItem]
) -> List[IroningPriceItem]:
    require_service_provider(db, user_id, allow_admin=True)
    for item in items:
        if item.price < 0:
            raise ValidationError(f"Price for {item.name} cannot be negative.")
    db.save_price_list(items)
    return items


def compute_totals(items: List[IroningOrderItem]) -> Tuple[float, int]:
    """(total cost, total item count) for an order."""
    total_cost = sum(item.price * item.quantity for item in items)
    total_items = sum(item.quantity for item in items)
    return total_cost, total_items


def _validate_address(address: IroningAddress) -> None:
    labels = (
        ("apartment_name", "Apartment name"),
        ("block", "Block"),
        ("floor_no", "Floor number"),
        ("flat_no", "Flat number"),
    )
    for field_name, label in labels:
        if not (getattr(address, field_name) or "").strip():
            raise ValidationError(f"{label} is required.")


def place_order(
    db: DbClient,
    identity: Identity,
    items: List[IroningOrderItem],
    address: IroningAddress,
) -> IroningOrder:
    """
    Places an order. The sequential order number is assigned by the store
    together with the write, and the address is remembered on the user's
    ironing profile for the next order.
    """
    ordered = [item for item in items if item.quantity > 0]
    if not ordered:
        raise ValidationError("Please add at least one item.")
    _validate_address(address)

    total_cost, total_items = compute_totals(ordered)
    profile = db.get_user(identity.uid)
    order = IroningOrder(
        id="",
        order_id=0,
        user_id=identity.uid,
        user_email=identity.email or "",
        user_name=(profile.name if profile else None) or NOT_AVAILABLE,
        user_phone=(profile.phone if profile else None) or NOT_AVAILABLE,
        items=ordered,
        total_cost=total_cost,
        total_items=total_items,
        status=IroningOrderStatus.PLACED,
        placed_at=utc_now(),
        address=address,
    )
    profile_update = IroningProfile(
        email=identity.email, phone=identity.phone_number, address=address
    )
    placed = db.place_ironing_order(order, profile_update)
    logger.info("Placed ironing order #%s for %s", placed.order_id, identity.uid)
    return placed


def next_status(status: IroningOrderStatus) -> Optional[IroningOrderStatus]:
    index = _STATUS_FLOW.index(status)
    if index + 1 < len(_STATUS_FLOW):
        return _STATUS_FLOW[index + 1]
    return None


def _get_order(db: DbClient, order_id: str) -> IroningOrder:
    order = db.get_ironing_order(order_id)
    if order is None:
        raise NotFoundError("Order not found.")
    return order


def advance_order(
    db: DbClient, user_id: str, order_id: str, status: IroningOrderStatus
) -> IroningOrder:
    """Moves an order one step along the status flow; no skipping or going back."""
    require_service_provider(db, user_id)
    order = _get_order(db, order_id)
    expected = next_status(order.status)
    if expected is None:
        raise ValidationError(f"Order #{order.order_id} is already {order.status}.")
    if status != expected:
        raise ValidationError(
            f"Order #{order.order_id} can only move from {order.status} to {expected}."
        )
    order.status = status
    order.status_history.append(
        StatusUpdate(status=status, timestamp=utc_now(), updated_by=user_id)
    )
    db.save_ironing_order(order)
    logger.info("Order #%s is now %s", order.order_id, status)
    return order


def set_estimated_delivery(
    db: DbClient, user_id: str, order_id: str, when: datetime
) -> IroningOrder:
    require_service_provider(db, user_id)
    order = _get_order(db, order_id)
    order.estimated_delivery = parse_timestamp(when)
    db.save_ironing_order(order)
    return order


def update_item_price(
    db: DbClient, user_id: str, order_id: str, index: int, price: float
) -> IroningOrder:
    require_service_provider(db, user_id)
    if price < 0:
        raise ValidationError("Price cannot be negative.")
    order = _get_order(db, order_id)
    if index < 0 or index >= len(order.items):
        raise ValidationError("No such item on this order.")
    order.items[index].price = price
    order.total_cost, _ = compute_totals(order.items)
    db.save_ironing_order(order)
    return order


def list_all_orders(db: DbClient, user_id: str) -> List[IroningOrder]:
    require_service_provider(db, user_id)
    return db.list_ironing_orders()


def list_user_orders(db: DbClient, user_id: str) -> List[IroningOrder]:
    return db.list_ironing_orders(user_id=user_id)


def get_ironing_profile(db: DbClient, user_id: str) -> IroningProfile:
    return db.get_ironing_profile(user_id) or IroningProfile()
