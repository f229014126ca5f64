"""
Property search: filter predicates, compound sort and per-seeker history.

Filtering and sorting run over the full property list in one pass; there is
no index or pagination.
"""

from __future__ import annotations

import logging
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lokality.db import DbClient
from lokality.exceptions import NotFoundError, ValidationError
from shared.constants import (
    MAX_PRICE_RENT,
    MAX_PRICE_SALE,
    PRICE_STEP_RENT,
    PRICE_STEP_SALE,
    SEARCH_HISTORY_LIMIT,
)
from shared.json_utils import snake_to_camel
from shared.types import PriceType, Property, PropertyStatus, SearchHistoryItem, UserProfile
from shared.utils import format_indian_currency

logger = logging.getLogger(__name__)

PriceSort = Literal["none", "asc", "desc"]
DateSort = Literal["asc", "desc"]


class SearchFilters(BaseModel):
    """
    Search form values. Omitted fields take their defaults, so a partial or
    older stored filter object parses into a complete one. Tri-state
    booleans use None for "any".
    """

    model_config = ConfigDict(alias_generator=snake_to_camel, populate_by_name=True)

    looking_to: PriceType = PriceType.SALE
    price_range: List[float] = Field(default_factory=lambda: [0, MAX_PRICE_SALE])
    location: Optional[str] = None
    property_type: Optional[str] = None
    configuration: Optional[str] = None
    floor_no: Optional[int] = None
    total_floors: Optional[int] = None
    houses_on_same_floor: Optional[int] = None
    main_door_direction: Optional[str] = None
    open_sides: Optional[str] = None
    sunlight_percentage_range: List[float] = Field(default_factory=lambda: [0, 100])
    kitchen_utility: Optional[bool] = None
    has_balcony: Optional[bool] = None
    sunlight_enters_home: Optional[bool] = None
    has_2_wheeler_parking: Optional[bool] = None
    has_4_wheeler_parking: Optional[bool] = None
    has_lift: Optional[bool] = None
    has_children_play_area: Optional[bool] = None
    has_doctor_clinic: Optional[bool] = None
    has_play_school: Optional[bool] = None
    has_super_market: Optional[bool] = None
    has_pharmacy: Optional[bool] = None
    has_clubhouse: Optional[bool] = None
    has_water_meter: Optional[bool] = None
    has_gas_pipeline: Optional[bool] = None

    @field_validator("price_range", "sunlight_percentage_range")
    @classmethod
    def _check_range(cls, value: List[float]) -> List[float]:
        if len(value) != 2:
            raise ValueError("range must have exactly two values")
        low, high = value
        if low > high:
            raise ValueError("range lower bound must not exceed upper bound")
        return value

    @field_validator("floor_no", "total_floors", "houses_on_same_floor", mode="before")
    @classmethod
    def _blank_number(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_stored(self) -> dict:
        """The filter object as persisted in search history (camelCase)."""
        return self.model_dump(mode="json", by_alias=True)


# (filter field, property accessor) for the tri-state boolean predicates.
BOOLEAN_PREDICATES = (
    ("kitchen_utility", lambda p: p.kitchen_utility),
    ("has_balcony", lambda p: p.has_balcony),
    ("sunlight_enters_home", lambda p: p.features.sunlight_enters_home),
    ("has_2_wheeler_parking", lambda p: p.parking.has_2_wheeler),
    ("has_4_wheeler_parking", lambda p: p.parking.has_4_wheeler),
    ("has_lift", lambda p: p.amenities.has_lift),
    ("has_children_play_area", lambda p: p.amenities.has_children_play_area),
    ("has_doctor_clinic", lambda p: p.amenities.has_doctor_clinic),
    ("has_play_school", lambda p: p.amenities.has_play_school),
    ("has_super_market", lambda p: p.amenities.has_super_market),
    ("has_pharmacy", lambda p: p.amenities.has_pharmacy),
    ("has_clubhouse", lambda p: p.amenities.has_clubhouse),
    ("has_water_meter", lambda p: p.amenities.has_water_meter),
    ("has_gas_pipeline", lambda p: p.amenities.has_gas_pipeline),
)


def max_price(looking_to: PriceType) -> int:
    return MAX_PRICE_RENT if looking_to == PriceType.RENT else MAX_PRICE_SALE


def price_step(looking_to: PriceType) -> int:
    return PRICE_STEP_RENT if looking_to == PriceType.RENT else PRICE_STEP_SALE


def _in_range(value: float, bounds: List[float]) -> bool:
    return bounds[0] <= value <= bounds[1]


def matches(property: Property, filters: SearchFilters) -> bool:
    """True when the property satisfies every active filter."""
    if property.status != PropertyStatus.AVAILABLE:
        return False
    if property.price.type != filters.looking_to:
        return False
    if not _in_range(property.price.amount, filters.price_range):
        return False
    if filters.location and filters.location.lower() not in property.location.lower():
        return False
    if filters.property_type and property.property_type != filters.property_type:
        return False
    if filters.configuration and property.configuration != filters.configuration:
        return False
    # Floor 0 (ground floor) is a real filter value.
    if filters.floor_no is not None and property.floor_no != filters.floor_no:
        return False
    if filters.total_floors is not None and property.total_floors != filters.total_floors:
        return False
    if (
        filters.houses_on_same_floor
        and property.features.houses_on_same_floor != filters.houses_on_same_floor
    ):
        return False
    if (
        filters.main_door_direction
        and property.main_door_direction != filters.main_door_direction
    ):
        return False
    if filters.open_sides and property.open_sides != filters.open_sides:
        return False
    if not _in_range(
        property.amenities.sunlight_percentage, filters.sunlight_percentage_range
    ):
        return False
    for field_name, accessor in BOOLEAN_PREDICATES:
        wanted = getattr(filters, field_name)
        if wanted is not None and accessor(property) != wanted:
            return False
    return True


def sort_properties(
    properties: List[Property],
    price_sort: PriceSort = "none",
    date_sort: DateSort = "desc",
) -> List[Property]:
    """
    Sorts by price when requested, then by posting date.

    Both passes are stable, so sorting by date first and price second gives
    price order with date as the tie-break.
    """
    ordered = sorted(
        properties, key=lambda p: p.posted_on, reverse=date_sort == "desc"
    )
    if price_sort != "none":
        ordered = sorted(
            ordered, key=lambda p: p.price.amount, reverse=price_sort == "desc"
        )
    return ordered


def search(
    properties: List[Property],
    filters: SearchFilters,
    price_sort: PriceSort = "none",
    date_sort: DateSort = "desc",
) -> List[Property]:
    filtered = [p for p in properties if matches(p, filters)]
    return sort_properties(filtered, price_sort=price_sort, date_sort=date_sort)


def _baseline_description(filters: SearchFilters) -> str:
    return (
        f"Looking to {filters.looking_to}, "
        f"up to {format_indian_currency(filters.price_range[1])}"
    )


def describe_search(filters: SearchFilters) -> str:
    """Short human-readable summary shown in the search history list."""
    parts = [
        f"Looking to {filters.looking_to}",
        f"in {filters.location}" if filters.location else "",
        filters.configuration.upper() if filters.configuration else "",
        filters.property_type or "",
        f"up to {format_indian_currency(filters.price_range[1])}",
    ]
    return ", ".join(part for part in parts if part)


def record_search(
    db: DbClient, profile: Optional[UserProfile], filters: SearchFilters
) -> Optional[List[SearchHistoryItem]]:
    """
    Prepends the search to a seeker's history, keeping the newest entries.

    Only seekers have a history, and searches that add nothing beyond the
    price type and upper bound are not recorded. Returns the new history,
    or None when nothing was recorded.
    """
    if profile is None or not profile.is_seeker:
        return None
    display = describe_search(filters)
    if len(display) <= len(_baseline_description(filters)):
        return None
    item = SearchHistoryItem(display=display, filters=filters.to_stored())
    profile.search_history = [item, *profile.search_history][:SEARCH_HISTORY_LIMIT]
    db.save_user(profile)
    logger.info("Recorded search for %s: %s", profile.id, display)
    return profile.search_history


def clear_history(db: DbClient, user_id: str) -> None:
    profile = db.get_user(user_id)
    if profile is None:
        raise NotFoundError("Could not find your profile.")
    profile.search_history = []
    db.save_user(profile)


def replay_history(
    db: DbClient,
    profile: UserProfile,
    index: int,
    price_sort: PriceSort = "none",
    date_sort: DateSort = "desc",
) -> Tuple[SearchFilters, List[Property], Optional[List[SearchHistoryItem]]]:
    """
    Re-runs a stored search. The stored filter object is parsed again, so
    entries saved before a filter existed pick up its default. The search is
    recorded again like a fresh one, so it returns to the front of the history.
    """
    if index < 0 or index >= len(profile.search_history):
        raise ValidationError("No such search history entry.")
    filters = SearchFilters.model_validate(profile.search_history[index].filters)
    results = search(
        db.list_properties(PropertyStatus.AVAILABLE),
        filters,
        price_sort=price_sort,
        date_sort=date_sort,
    )
    history = record_search(db, profile, filters)
    return filters, results, history
